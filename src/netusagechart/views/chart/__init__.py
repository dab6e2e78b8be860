"""
Usage chart view: `renderer.ChartRenderer` draws curves with matplotlib and
`window.ChartWindow` hosts it in a PyQt6 widget.
"""
