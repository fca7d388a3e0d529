r"""
Macros of the `hyperref` package.
"""

macros = {
    'hypersetup': {'signature': 'm',
                   'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'href': {'signature': 'o m m'},
    'url': {'signature': 'm'},
    'nolinkurl': {'signature': 'm'},
    'hyperref': {'signature': 'o m'},
    'hyperlink': {'signature': 'm m'},
    'hypertarget': {'signature': 'm m'},
    'autoref': {'signature': 's m'},
    'autopageref': {'signature': 's m'},
    'pdfbookmark': {'signature': 'o m m'},
    'texorpdfstring': {'signature': 'm m'},
}

environments = {}
