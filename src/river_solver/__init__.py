"""River-crossing A* solver.

A generic graph-search A* engine with cost revision, instantiated over the
Farmer/Wolf/Duck/Corn river-crossing puzzle.
"""

__version__ = "0.1.0"
