r"""
This module provides the main preprocessor engine, which parses a document
and runs a sequence of fixes on it.
"""

import sys
import importlib

import logging

from pylatexenc import latexwalker


logger = logging.getLogger(__name__)


from . import nodes as latexnodes
from .parser import LatexParser
from .printer import print_raw


class _TemporarilySetSysPath:
    def __init__(self, dir):
        self.dir = dir

    def __enter__(self):
        self.oldsyspath = sys.path
        if self.dir:
            sys.path = [self.dir] + sys.path
        return self

    def __exit__(self, typ, value, traceback):
        if self.dir:
            sys.path = self.oldsyspath


class LatexPreprocessor:
    r"""
    Main preprocessor class.

    Arguments:

    - `config_dir`: directory relative to which custom fix modules named in
      the configuration are searched for.

    - `packages`, `macros`, `environments`, `at_letter`, `expl3`,
      `tolerant_parsing`: passed on to
      the :py:class:`latexast.parser.LatexParser` that reads the documents
      (available as the attribute `parser`).

    Typical use::

        lpp = LatexPreprocessor()
        lpp.install_fix(RemoveComments())
        lpp.initialize()
        result = lpp.execute_string(r'Hello % world')
        lpp.finalize()
    """
    def __init__(self, *,
                 config_dir=None,
                 packages=None,
                 macros=None,
                 environments=None,
                 at_letter=False,
                 expl3=False,
                 tolerant_parsing=True):

        super().__init__()

        # directory relative to which to search for custom python fixes:
        self.config_dir = config_dir

        self.parser = LatexParser(packages=packages, macros=macros,
                                  environments=environments,
                                  at_letter=at_letter, expl3=expl3,
                                  tolerant_parsing=tolerant_parsing)

        self.fixes = []

        self.initialized = False

    def install_fix(self, fix, *, prepend=False):
        r"""
        Register the given fix instance to be run after (respectively before if
        `prepend=True`) the existing list of fixes.

        The type of `fix` must be a subclass of
        :py:class:`latexast.fix.BaseFix`.
        """

        # sanity check -- make sure custom fix classes don't forget to call
        # their superclass constructor.
        if not getattr(fix, '_basefix_constr_called', False):
            raise RuntimeError("Fix class {}.{} does not call its superclass constructor"
                               .format(fix.__class__.__module__, fix.__class__.__name__))

        if prepend:
            self.fixes.insert(0, fix)
        else:
            self.fixes.append(fix)

        fix.set_lpp(self)

    def install_fixes_from_config(self, config_fixes):
        r"""
        Install the fixes listed in the ``fixes:`` section of a configuration
        file.  Each item is either a dotted class name such as
        ``latexast.fixes.comments.RemoveComments``, or a dictionary with keys
        `name` and (optionally) `config`, the keyword arguments for the fix
        class.
        """
        for fixconfig in config_fixes:
            if isinstance(fixconfig, str):
                fixconfig = {'name': fixconfig}

            fixname = fixconfig['name']

            if '.' not in fixname:
                raise ValueError("Invalid fix name ‘{}’, expected a dotted class name"
                                 .format(fixname))

            modname, clsname = fixname.rsplit('.', maxsplit=1)

            # allow package to be in current working directory
            with _TemporarilySetSysPath(dir=self.config_dir):
                mod = importlib.import_module(modname)

            if clsname not in mod.__dict__:
                raise ValueError("Module ‘%s’ does not provide a class named ‘%s’"%(
                    modname, clsname))

            cls = mod.__dict__[clsname]

            self.install_fix(cls(**(fixconfig.get('config') or {})))

    def initialize(self):
        r"""
        Perform essential initialization tasks.

        Must be called after all fixes are installed, but before
        :py:meth:`preprocess()` is called.
        """

        logger.debug("initializing preprocessor and fixes")

        for fix in self.fixes:
            fix.initialize()

        #
        # Now check if the fixes have macro/env specs to add.  Do this after
        # initialize() so that fixes have the opportunity to determine what
        # specs they need.
        #
        for fix in self.fixes:
            specs = fix.specs()
            if specs:
                logger.debug("Adding definitions from %s", fix.fix_name())
                self.parser.add_definitions(**specs)

        self.initialized = True

    def finalize(self):
        r"""
        Calls the `finalize()` routine on all fixes.  Fixes have the opportunity to
        finish up stuff after the document has been processed.
        """

        logger.debug("finalizing preprocessor and fixes")

        for fix in self.fixes:
            fix.finalize()

    def parse(self, s, *, input_source=None):
        r"""
        Parse the LaTeX string `s` and return the root node of its syntax
        tree.

        The `input_source` argument is a short descriptive string of the source
        of the LaTeX content for error messages (e.g., the file name).
        """
        try:
            return self.parser.parse(s)
        except latexwalker.LatexWalkerParseError as e:
            if input_source and not e.input_source:
                e.input_source = input_source
            raise

    def preprocess(self, tree):
        r"""
        Run all the installed fixes on the syntax tree `tree` and return the
        result.

        The fixes work on a copy of `tree`: if one of them raises an
        exception, the tree given as argument is left untouched.
        """

        if not self.initialized:
            raise RuntimeError("You forgot to call LatexPreprocessor.initialize()")

        newtree = latexnodes.clone(tree)

        for fix in self.fixes:
            logger.info("*** Fix %s", fix.fix_name())
            newtree = fix.preprocess(newtree)

        return newtree

    def execute_string(self, s, *, input_source=None):
        r"""
        Parse the string `s` as LaTeX code, apply all installed fixes, and return
        the preprocessed LaTeX code.
        """
        tree = self.parse(s, input_source=input_source)
        return print_raw(self.preprocess(tree))

    def execute_file(self, fname, *, output_fname=None):
        r"""
        Process an input file named `fname`, apply all the fixes, and return
        the result.  If `output_fname` is given, the result is also written to
        that file.
        """

        with open(fname, 'r') as f:
            s = f.read()

        outdata = self.execute_string(s, input_source='file ‘{}’'.format(fname))

        if output_fname:
            with open(output_fname, 'w') as f:
                f.write(outdata)

        return outdata
