"""
The APP layer wires the model into Qt: the layout controller, the text
shaper backed by Qt font metrics and the widgets.
"""
