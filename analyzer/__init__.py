"""
Contract risk analyzer package.
"""
