"""
SkillSwap - peer-to-peer skill exchange API.
"""
