"""
NetUsageChart: cumulative network usage charts with a seasonal usage estimate.
"""
