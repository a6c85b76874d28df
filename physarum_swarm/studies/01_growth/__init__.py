"""
Study 01: Growth

Watch ten thousand organisms find each other.

Questions to explore:
- How long before the first trails appear?
- Do networks form faster near the centre than at the edges?
- What happens to the pattern if decay or deposit changes?
- Does the same seed always grow the same network?
"""
