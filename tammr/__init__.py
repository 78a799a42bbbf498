"""
A tree-walking interpreter for a small scripting language with closures, arrays and maps.
"""
