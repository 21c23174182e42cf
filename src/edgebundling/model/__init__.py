"""
The MODEL layer contains pure data structures and the diagram geometry.
It has NO knowledge of the GUI (Qt) or the drawing backend (matplotlib).
It deals with Records, the Hierarchy, Layout, Arcs, Bundles and Highlighting.
"""
