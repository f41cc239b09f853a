"""
The MODEL layer contains pure data structures and the layout algorithms.
It has NO knowledge of the GUI (Qt).
It deals with Tokens, Sizing, Labels and Placement geometry.
"""
