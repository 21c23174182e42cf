"""Matplotlib drawing of a DiagramGeometry and its interactive window."""
