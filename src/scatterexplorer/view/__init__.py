"""Qt widgets: main window, control panel and the scatter render surface."""
