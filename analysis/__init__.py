"""
Analysis Module

Summary statistics, figures, and the narrative report

Modules:
- summary_statistics: Grouped reductions and the density trend fit
- reports: Figure rendering and HTML report generation
"""

__version__ = "1.0.0"
