"""
Utility package providing helper functions for Gears.

This package includes:
- arrays, structure: lists and dicts addressed by property paths, trees
- strings, text, numbers: string helpers, words and sentences, number parsing
- objects, classes, composite: object graphs, class and callable introspection
- encoding, fs, files, html: JSON and cache keys, paths, file types, HTML
- config: environment and file configuration loading

The helpers live in their modules and are imported from there:

    from gears.util import arrays
    arrays.collect(people, 'name')
"""

__all__ = [
    'arrays', 'structure', 'strings', 'text', 'numbers',
    'objects', 'classes', 'composite',
    'encoding', 'fs', 'files', 'html', 'config',
]
