r"""
Document command definitions of the LaTeX3 `xparse` interface.
"""

_break = {'breakAround': True}

macros = {
    'NewDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'RenewDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'ProvideDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'DeclareDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'NewDocumentEnvironment': {'signature': 'm m m m', 'renderInfo': _break},
    'RenewDocumentEnvironment': {'signature': 'm m m m', 'renderInfo': _break},
    'ProvideDocumentEnvironment': {'signature': 'm m m m', 'renderInfo': _break},
    'DeclareDocumentEnvironment': {'signature': 'm m m m', 'renderInfo': _break},
    'NewExpandableDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'RenewExpandableDocumentCommand': {'signature': 'm m m', 'renderInfo': _break},
    'RequirePackage': {'signature': 'o m',
                       'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'DeclareOption': {'signature': 'm m', 'renderInfo': _break},
}

environments = {}
