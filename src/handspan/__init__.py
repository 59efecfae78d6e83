"""handspan — piano fingering assignment by windowed hand-travel search.

Sub-packages:
    fingering_engine – note model, hand model, cost, pruning, search, I/O
    evaluation       – ground-truth loading and accuracy scoring
"""

__version__ = "0.1.0"
