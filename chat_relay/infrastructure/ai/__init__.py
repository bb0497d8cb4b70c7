"""
AI infrastructure: the trained intent classifier and the sentiment lexicon.

Both are built once at startup and shared read-only by every connection.
"""
