import streamlit as st
import logging
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

from file_dependency_analyzer import AnalyzerConfig, CircularMode, DependencyResolvePlugin
from file_dependency_analyzer.config import get_formatter
from file_dependency_analyzer.cycle_detector import CycleDetector
from file_dependency_analyzer.edge_loader import load_edges_csv, load_edges_json
from file_dependency_analyzer.exceptions import DependencyAnalyzerError
from file_dependency_analyzer.formatters import FORMATTERS
from file_dependency_analyzer.graph_builder import get_graph_stats
from file_dependency_analyzer.visualizer import DependencyVisualizer

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# =============================================================================
# ANALYSIS
# =============================================================================

def run_analysis(file_name: str, content: str, mode: str, formatter_name: str, collect_all: bool):
    """Replay an uploaded edge stream through a fresh plugin session"""
    if Path(file_name).suffix.lower() == '.csv':
        edges = load_edges_csv(content)
    else:
        edges = load_edges_json(content)

    config = AnalyzerConfig.from_env(
        circular_mode=mode,
        collect_all_cycles=collect_all,
        assets_formatter=get_formatter(formatter_name)
    )
    plugin = DependencyResolvePlugin(config)
    for edge in edges:
        plugin.add_edge(edge)
    return plugin.on_done()

# =============================================================================
# DASHBOARD
# =============================================================================

def main():
    st.set_page_config(page_title="File Dependency Analyzer", page_icon="🔗", layout="wide")

    st.title("🔗 File Dependency Analyzer")
    st.markdown("##### Replay a recorded build edge stream to inspect the module graph and circular dependencies.")

    with st.sidebar:
        st.header("⚙️ Configuration")
        mode = st.selectbox("Circular mode", [m.value for m in CircularMode],
                            index=[m.value for m in CircularMode].index(CircularMode.CIRCULAR.value))
        formatter_name = st.selectbox("Report format", sorted(FORMATTERS), index=sorted(FORMATTERS).index('json'))
        collect_all = st.checkbox("Collect all cycles", value=False)
        st.info("Edges are `{\"path\", \"issuer\"}` objects (JSON) or `path,issuer` rows (CSV). "
                "An edge whose path equals its issuer marks the entry module.")

    col1, col2 = st.columns([1, 2])

    with col1:
        st.markdown("#### Upload Edge Stream")
        uploaded_file = st.file_uploader("Choose an edge file", type=['json', 'csv'])

        if uploaded_file is not None:
            if st.button("🔍 Analyze Dependencies", type="primary", use_container_width=True):
                with st.spinner("Assembling dependency graph..."):
                    try:
                        content = uploaded_file.read().decode('utf-8')
                        st.session_state.dependency_analysis = run_analysis(
                            uploaded_file.name, content, mode, formatter_name, collect_all)
                    except DependencyAnalyzerError as e:
                        logger.error(f"Analysis failed: {e}")
                        st.error(f"Error processing file: {e}")

    with col2:
        if 'dependency_analysis' in st.session_state:
            result = st.session_state.dependency_analysis
            stats = get_graph_stats(result.graph)

            st.markdown("#### 📊 Quick Stats")
            stat_col1, stat_col2, stat_col3 = st.columns(3)
            with stat_col1:
                st.metric("Modules", stats['total_modules'])
            with stat_col2:
                st.metric("Dependencies", stats['total_dependencies'])
            with stat_col3:
                st.metric("Entry", stats['root'] or "none")

            if not result.graph.has_root:
                st.warning("No entry module in the edge stream, nothing to report.")
            elif result.has_cycle:
                st.error(f"🚨 **Circular dependency**: {' → '.join(result.circular_path)}")
            else:
                st.success("✅ **Healthy**: No circular dependencies detected!")

            if result.output_file is not None:
                st.caption(f"Report written to `{result.output_file}`")
        else:
            st.info("👈 Upload an edge file to see the analysis.")

    if 'dependency_analysis' in st.session_state:
        st.markdown("---")
        result = st.session_state.dependency_analysis
        visualizer = DependencyVisualizer(result.graph)
        cycles = result.cycles or ([result.circular_path] if result.circular_path else [])

        tab1, tab2, tab3 = st.tabs(["🔍 Cycle Details", "📊 Graph Visualization", "📄 Report"])

        with tab1:
            st.subheader("🔍 Detected Cycles")
            visualizer.display_cycle_details_table(cycles)
            sccs = CycleDetector().get_strongly_connected_components(result.graph)
            if sccs:
                st.markdown(f"**Strongly connected components**: {len(sccs)}")
                for scc in sccs:
                    st.write(", ".join(scc))

        with tab2:
            st.subheader("📊 Dependency Graph Visualization")
            st.plotly_chart(visualizer.create_dependency_graph_plot(cycles), use_container_width=True)

        with tab3:
            st.subheader("📄 Report")
            if result.content is None:
                st.error(f"No report produced: {result.error}")
            else:
                st.code(result.content)
                st.download_button("Download report", result.content,
                                   file_name=Path(str(result.output_file or 'dependency.json')).name)


if __name__ == "__main__":
    main()
