"""
Utility functions module.

Calendar labels and numeric display formatting shared by the chart
projector and dashboard renderers.

Display conventions:
- Percentages are value * 100 shown with two decimals and an explicit sign
- Absent values render as an em-dash, never as 0 or blank
- Axis labels follow the series cadence (2024 / 2024-Q1 / Jan 2024)
"""
