"""
Environments: worlds the organisms live in.
"""
