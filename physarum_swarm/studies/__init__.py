"""
Studies: Structured experiments for understanding.

Each study begins with observation, not hypothesis.

Study progression:
1. Growth - watch a colony build its network from nothing
"""
