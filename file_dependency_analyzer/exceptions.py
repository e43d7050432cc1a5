"""
Exceptions raised by the dependency analyzer
"""


class DependencyAnalyzerError(Exception):
    """Base class for all analyzer errors"""


class ConfigurationError(DependencyAnalyzerError):
    """Raised when an option has an unsupported value"""


class AnalysisStateError(DependencyAnalyzerError):
    """Raised when plugin callbacks arrive out of order"""


class GraphNotAssembledError(DependencyAnalyzerError):
    """Raised when detection or reporting runs on something that is not an assembled graph"""


class EdgeLoadError(DependencyAnalyzerError):
    """Raised when a recorded edge stream cannot be read"""
