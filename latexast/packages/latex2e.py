r"""
Macros and environments of the LaTeX2e kernel and its standard classes.
"""

_break = {'breakAround': True}
_par = {'inParMode': True}

macros = {
    '\\': {'signature': '!s o'},
    # definitions
    'newcommand': {'signature': 's +m o +o +m', 'renderInfo': _break},
    'renewcommand': {'signature': 's +m o +o +m', 'renderInfo': _break},
    'providecommand': {'signature': 's +m o +o +m', 'renderInfo': _break},
    'DeclareRobustCommand': {'signature': 's +m o +o +m', 'renderInfo': _break},
    'newenvironment': {'signature': 's m o o m m', 'renderInfo': _break},
    'renewenvironment': {'signature': 's m o o m m', 'renderInfo': _break},
    'newtheorem': {'signature': 's m o m o', 'renderInfo': _break},
    'newfont': {'signature': 'm m', 'renderInfo': _break},
    # counters
    'newcounter': {'signature': 'm o', 'renderInfo': _break},
    'usecounter': {'signature': 'm'},
    'setcounter': {'signature': 'm m', 'renderInfo': _break},
    'addtocounter': {'signature': 'm m', 'renderInfo': _break},
    'stepcounter': {'signature': 'm', 'renderInfo': _break},
    'refstepcounter': {'signature': 'm', 'renderInfo': _break},
    'value': {'signature': 'm'},
    'alph': {'signature': 'm'},
    'Alph': {'signature': 'm'},
    'arabic': {'signature': 'm'},
    'roman': {'signature': 'm'},
    'Roman': {'signature': 'm'},
    'fnsymbol': {'signature': 'm'},
    # lengths
    'newlength': {'signature': 'm', 'renderInfo': _break},
    'setlength': {'signature': 'm m', 'renderInfo': _break},
    'addtolength': {'signature': 'm m', 'renderInfo': _break},
    'settodepth': {'signature': 'm m', 'renderInfo': _break},
    'settoheight': {'signature': 'm m', 'renderInfo': _break},
    'settowidth': {'signature': 'm m', 'renderInfo': _break},
    # spaces and breaks
    'stretch': {'signature': 'm'},
    'hspace': {'signature': 's m'},
    'vspace': {'signature': 's m', 'renderInfo': _break},
    'phantom': {'signature': 'm'},
    'vphantom': {'signature': 'm'},
    'hphantom': {'signature': 'm'},
    'vfill': {'renderInfo': _break},
    'indent': {'renderInfo': _break},
    'noindent': {'renderInfo': _break},
    'smallskip': {'renderInfo': _break},
    'medskip': {'renderInfo': _break},
    'bigskip': {'renderInfo': _break},
    'newline': {'renderInfo': _break},
    'linebreak': {'signature': 'o', 'renderInfo': _break},
    'nolinebreak': {'signature': 'o', 'renderInfo': _break},
    'clearpage': {'renderInfo': _break},
    'cleardoublepage': {'renderInfo': _break},
    'newpage': {'renderInfo': _break},
    'pagebreak': {'signature': 'o', 'renderInfo': _break},
    'nopagebreak': {'signature': 'o', 'renderInfo': _break},
    # boxes
    'newsavebox': {'signature': 'm', 'renderInfo': _break},
    'sbox': {'signature': 'm m', 'renderInfo': _break},
    'savebox': {'signature': 'm o o m', 'renderInfo': _break},
    'makebox': {'signature': 'd() o o m', 'renderInfo': _break},
    'fbox': {'signature': 'm'},
    'framebox': {'signature': 'o o m', 'renderInfo': _break},
    'parbox': {'signature': 'o o o m m', 'renderInfo': _break},
    'raisebox': {'signature': 'm o o m'},
    'marginpar': {'signature': 'o m', 'renderInfo': _break},
    'colorbox': {'signature': 'o m m', 'renderInfo': _break},
    'fcolorbox': {'signature': 'o m m', 'renderInfo': _break},
    # preamble and front matter
    'documentclass': {'signature': 'o m',
                      'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'usepackage': {'signature': 'o m',
                   'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'input': {'signature': 'm', 'renderInfo': _break},
    'include': {'signature': 'm', 'renderInfo': _break},
    'includeonly': {'signature': 'm',
                    'renderInfo': {'breakAround': True, 'pgfkeysArgs': True}},
    'title': {'signature': 'm', 'renderInfo': {'breakAround': True, 'inParMode': True}},
    'author': {'signature': 'm', 'renderInfo': {'breakAround': True, 'inParMode': True}},
    'date': {'signature': 'm', 'renderInfo': _break},
    'thanks': {'signature': 'm', 'renderInfo': {'breakAround': True, 'inParMode': True}},
    'maketitle': {'renderInfo': _break},
    'pagenumbering': {'signature': 'm', 'renderInfo': _break},
    'pagestyle': {'signature': 'm', 'renderInfo': _break},
    'thispagestyle': {'signature': 'm', 'renderInfo': _break},
    # sectioning
    'part': {'signature': 's o m', 'renderInfo': _break},
    'chapter': {'signature': 's o m', 'renderInfo': _break},
    'section': {'signature': 's o m', 'renderInfo': _break},
    'subsection': {'signature': 's o m', 'renderInfo': _break},
    'subsubsection': {'signature': 's o m', 'renderInfo': _break},
    'paragraph': {'signature': 's o m', 'renderInfo': _break},
    'subparagraph': {'signature': 's o m', 'renderInfo': _break},
    'appendix': {'renderInfo': _break},
    'frontmatter': {'renderInfo': _break},
    'mainmatter': {'renderInfo': _break},
    'backmatter': {'renderInfo': _break},
    # accents
    "'": {'signature': 'm'},
    '`': {'signature': 'm'},
    '"': {'signature': 'm'},
    '^': {'signature': 'm'},
    '~': {'signature': 'm'},
    '=': {'signature': 'm'},
    '.': {'signature': 'm'},
    'c': {'signature': 'm'},
    'v': {'signature': 'm'},
    'u': {'signature': 'm'},
    'H': {'signature': 'm'},
    # lists, floats, notes
    'item': {'signature': 'o', 'renderInfo': {'hangingIndent': True}},
    'caption': {'signature': 'o m', 'renderInfo': {'breakAround': True, 'inParMode': True}},
    'footnote': {'signature': 'o m', 'renderInfo': _par},
    'footnotemark': {'signature': 'o'},
    'footnotetext': {'signature': 'o m', 'renderInfo': _par},
    'centering': {'renderInfo': _break},
    'multicolumn': {'signature': 'm m m'},
    'rule': {'signature': 'o m m'},
    # references
    'label': {'signature': 'o m'},
    'ref': {'signature': 's m'},
    'pageref': {'signature': 's m'},
    'cite': {'signature': 'o m'},
    'bibitem': {'signature': 'o m', 'renderInfo': {'hangingIndent': True}},
    'bibliography': {'signature': 'm', 'renderInfo': _break},
    'bibliographystyle': {'signature': 'm', 'renderInfo': _break},
    'addtocontents': {'signature': 'm m', 'renderInfo': _break},
    'addcontentsline': {'signature': 'm m m', 'renderInfo': _break},
    # fonts
    'textrm': {'signature': 'm', 'renderInfo': _par},
    'textit': {'signature': 'm', 'renderInfo': _par},
    'textmd': {'signature': 'm', 'renderInfo': _par},
    'textbf': {'signature': 'm', 'renderInfo': _par},
    'textup': {'signature': 'm', 'renderInfo': _par},
    'textsl': {'signature': 'm', 'renderInfo': _par},
    'textsf': {'signature': 'm', 'renderInfo': _par},
    'textsc': {'signature': 'm', 'renderInfo': _par},
    'texttt': {'signature': 'm', 'renderInfo': _par},
    'textnormal': {'signature': 'm', 'renderInfo': _par},
    'emph': {'signature': 'm', 'renderInfo': _par},
    'underline': {'signature': 'm'},
    'uppercase': {'signature': 'm', 'renderInfo': _par},
    'mathbf': {'signature': 'm'},
    'mathsf': {'signature': 'm'},
    'mathtt': {'signature': 'm'},
    'mathit': {'signature': 'm'},
    'mathnormal': {'signature': 'm'},
    'mathcal': {'signature': 'm'},
    'mathrm': {'signature': 'm'},
    # math
    'sqrt': {'signature': 'o m', 'renderInfo': {'inMathMode': True}},
    'frac': {'signature': 'm m', 'renderInfo': {'inMathMode': True}},
    'stackrel': {'signature': 'm m'},
    'ensuremath': {'signature': 'm', 'renderInfo': {'inMathMode': True}},
    'mbox': {'signature': 'm', 'renderInfo': {'inMathMode': False}},
    # colors
    'definecolor': {'signature': 'm m m', 'renderInfo': _break},
    'pagecolor': {'signature': 'o m', 'renderInfo': _break},
}

environments = {
    'document': {},
    'array': {'signature': 'o m', 'renderInfo': {'alignContent': True}},
    'tabular': {'signature': 'o m', 'renderInfo': {'alignContent': True}},
    'tabular*': {'signature': 'm o m', 'renderInfo': {'alignContent': True}},
    'tabbing': {'renderInfo': {'alignContent': True}},
    'description': {'signature': 'o'},
    'enumerate': {'signature': 'o', 'renderInfo': {'pgfkeysArgs': True}},
    'itemize': {'signature': 'o'},
    'trivlist': {'signature': 'o'},
    'list': {'signature': 'm m'},
    'figure': {'signature': 'o'},
    'figure*': {'signature': 'o'},
    'table': {'signature': 'o'},
    'table*': {'signature': 'o'},
    'minipage': {'signature': 'o o o m'},
    'picture': {'signature': 'r() d()'},
    'filecontents': {'signature': 'o m'},
    'filecontents*': {'signature': 'o m'},
    'thebibliography': {'signature': 'm'},
    'math': {'renderInfo': {'inMathMode': True}},
    'displaymath': {'renderInfo': {'inMathMode': True}},
    'equation': {'renderInfo': {'inMathMode': True}},
    'eqnarray': {'renderInfo': {'inMathMode': True, 'alignContent': True}},
    'eqnarray*': {'renderInfo': {'inMathMode': True, 'alignContent': True}},
}
