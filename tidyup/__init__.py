"""
TidyUp
======

Point it at a folder, let an AI model suggest a destination subfolder for
each file, move the ones you accept, and undo the last batch if you change
your mind.
"""

__version__ = "0.1.0"
