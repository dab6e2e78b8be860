"""
Views submodule for NetUsageChart.

Contains the matplotlib renderer and the PyQt6 window that hosts it.
"""
