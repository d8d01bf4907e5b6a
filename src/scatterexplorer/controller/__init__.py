"""
The CONTROLLER layer glues the analysis core to the view: it owns the
zoom/pan pipeline, the keyed redraw diffing and the background dataset loader.
"""
