"""Analysis sessions tying the indices and passes together."""

from analysis.session import AnalysisSession, IndexSummary

__all__ = ["AnalysisSession", "IndexSummary"]
