r"""
Macros and environments of the AMS packages (amsmath, amssymb, amsthm) and
mathtools.
"""

_math = {'inMathMode': True}
_align = {'inMathMode': True, 'alignContent': True}

macros = {
    'text': {'signature': 'm', 'renderInfo': {'inMathMode': False}},
    'intertext': {'signature': 'm', 'renderInfo': {'inMathMode': False}},
    'tag': {'signature': 's m', 'renderInfo': {'inMathMode': False}},
    'operatorname': {'signature': 's m'},
    'DeclareMathOperator': {'signature': 's m m', 'renderInfo': {'breakAround': True}},
    'dfrac': {'signature': 'm m', 'renderInfo': _math},
    'tfrac': {'signature': 'm m', 'renderInfo': _math},
    'binom': {'signature': 'm m', 'renderInfo': _math},
    'dbinom': {'signature': 'm m', 'renderInfo': _math},
    'tbinom': {'signature': 'm m', 'renderInfo': _math},
    'overset': {'signature': 'm m'},
    'underset': {'signature': 'm m'},
    'boxed': {'signature': 'm'},
    'substack': {'signature': 'm'},
    'mathbb': {'signature': 'm'},
    'mathscr': {'signature': 'm'},
    'mathfrak': {'signature': 'm'},
    'boldsymbol': {'signature': 'm'},
    'underbrace': {'signature': 'm'},
    'overbrace': {'signature': 'm'},
    'xleftarrow': {'signature': 'o m'},
    'xrightarrow': {'signature': 'o m'},
    'eqref': {'signature': 'm'},
    'numberwithin': {'signature': 'o m m', 'renderInfo': {'breakAround': True}},
    'theoremstyle': {'signature': 'm', 'renderInfo': {'breakAround': True}},
    'newtheoremstyle': {'signature': 'm m m m m m m m m',
                        'renderInfo': {'breakAround': True}},
    'DeclarePairedDelimiter': {'signature': 'm m m', 'renderInfo': {'breakAround': True}},
    'mathtoolsset': {'signature': 'm',
                     'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
}

environments = {
    'equation*': {'renderInfo': _math},
    'align': {'renderInfo': _align},
    'align*': {'renderInfo': _align},
    'alignat': {'signature': 'm', 'renderInfo': _align},
    'alignat*': {'signature': 'm', 'renderInfo': _align},
    'flalign': {'renderInfo': _align},
    'flalign*': {'renderInfo': _align},
    'gather': {'renderInfo': _math},
    'gather*': {'renderInfo': _math},
    'multline': {'renderInfo': _math},
    'multline*': {'renderInfo': _math},
    'split': {'renderInfo': _math},
    'aligned': {'signature': 'o', 'renderInfo': _align},
    'gathered': {'signature': 'o', 'renderInfo': _math},
    'cases': {'renderInfo': _align},
    'matrix': {'renderInfo': _align},
    'pmatrix': {'renderInfo': _align},
    'bmatrix': {'renderInfo': _align},
    'Bmatrix': {'renderInfo': _align},
    'vmatrix': {'renderInfo': _align},
    'Vmatrix': {'renderInfo': _align},
    'smallmatrix': {'renderInfo': _align},
    'subequations': {},
    'theorem': {'signature': 'o'},
    'lemma': {'signature': 'o'},
    'proposition': {'signature': 'o'},
    'corollary': {'signature': 'o'},
    'definition': {'signature': 'o'},
    'remark': {'signature': '!o'},
    'example': {'signature': '!o'},
    'proof': {'signature': 'o'},
}
