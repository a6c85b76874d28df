"""
Observations: turning fields into pictures.
"""
