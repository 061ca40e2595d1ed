"""
Vesti — size recommendation engine
"""
