"""
Business Scorecard Engine
Scores monthly business submissions: section scores, composite score,
RAG band, month-over-month trend and portfolio heatmap.
"""

__version__ = "1.0.0"
