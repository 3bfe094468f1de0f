"""
srcfmt command line interface
"""
