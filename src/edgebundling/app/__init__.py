"""
The APP layer owns the mutable diagram state and turns interaction commands
into full recomputations of the model.
"""
