r"""
Macros of the `graphicx` and `xcolor` packages.
"""

macros = {
    'includegraphics': {'signature': 's o o m',
                        'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'graphicspath': {'signature': 'm', 'renderInfo': {'breakAround': True}},
    'rotatebox': {'signature': 'o m m'},
    'scalebox': {'signature': 'm o m'},
    'reflectbox': {'signature': 'm'},
    'resizebox': {'signature': 's m m m'},
    'color': {'signature': 'o m'},
    'textcolor': {'signature': 'o m m', 'renderInfo': {'inParMode': True}},
}

environments = {}
