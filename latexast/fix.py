r"""
This module provides the base class for fixes.

A *fix* is a rewrite pass over the syntax tree.  Fixes are installed in a
:py:class:`latexast.preprocessor.LatexPreprocessor`, which runs them one
after the other on the parsed document.
"""

import logging
logger = logging.getLogger(__name__)

from . import nodes as latexnodes
from .parser import get_default_parser
from .printer import print_raw
from .replace import replace_node


class DontFixThisNode(Exception):
    r"""
    Can be raised in :py:meth:`BaseFix.fix_node()` to indicate that the given
    node should not be "fixed".
    """
    pass


class BaseFix:
    r"""
    Base class for defining specific `latexast` fixes.

    A `fix` should be defined by defining a subclass of this class and
    overriding the methods that will allow to transform nodes.

    The methods you should consider overriding are:

    - :py:meth:`fix_node()`: this method will be called once for each node in
      the document.  You can then "fix" the node however you like.

    - :py:meth:`specs()`: provide additional macro and environment signatures
      to the LaTeX parser.

    - :py:meth:`initialize()` and :py:meth:`finalize()`: these will be called
      before all fixes and after all fixes have run, respectively.

    .. py:attribute:: lpp

       The `lpp` attribute holds a reference to the preprocessor object (a
       :py:class:`latexast.preprocessor.LatexPreprocessor` instance).  It is
       used to re-parse LaTeX code returned by :py:meth:`fix_node()`.

       Note, if you create an instance of the fix manually, you need to call
       :py:meth:`set_lpp()` to set the `lpp` attribute.  Without it, strings
       are parsed with the default package tables.
    """
    def __init__(self):
        self.lpp = None
        self._basefix_constr_called = True # preprocessor checks this to prevent silly bugs
        self._fix_name = self.__class__.__module__ + '.' + self.__class__.__name__

    def fix_name(self):
        """
        Returns the full name/identifier of the fix, like
        'latexast.fixes.comments.RemoveComments'.  No need to reimplement this.
        """
        return self._fix_name

    def set_lpp(self, lpp):
        """
        Set the :py:attr:`lpp` attribute to `lpp`.

        You don't have to call `set_lpp()` on fixes that are loaded via the
        preprocessor's :py:meth:`install_fix()
        <latexast.preprocessor.LatexPreprocessor.install_fix()>` method.
        """
        self.lpp = lpp

    def initialize(self):
        """
        This method is called once before the fixes process any document.

        The default implementation does nothing, reimplement to do something
        useful for your fix.
        """
        pass

    def specs(self):
        r"""
        Return any custom macro and environment signatures that the parser
        needs to know about for this fix to work.

        Return `None` if no definitions are needed, or return a dict with keys
        'macros' and 'environments' holding signature tables (see
        :py:mod:`latexast.packages`), for instance::

            {'macros': {'Hmax': {'signature': 'o m'}}}

        The default implementation returns `None`.
        """
        return None

    def finalize(self):
        """
        Method that is called after all fixes have finished processing their
        transformations ("fixes").

        The default implementation does nothing, reimplement to do something
        useful for your fix.
        """
        pass

    def preprocess(self, tree):
        r"""
        Apply this fix to `tree` (a node or a node list) and return the
        transformed tree.  The tree is modified in place where possible.

        Don't subclass this, rather, you should subclass :py:meth:`fix_node()`
        or :py:meth:`fix_tree()`.
        """
        newtree = self.fix_tree(tree)
        if newtree is not None:
            return newtree

        def callback(node, info):
            try:
                nn = self.fix_node(node, info)
            except DontFixThisNode:
                return None
            if nn is None or nn is node:
                return None
            if isinstance(nn, str):
                return self.parse_nodes(nn)
            return nn

        return replace_node(tree, callback)

    def fix_tree(self, tree):
        r"""
        This method is one of two methods responsible for implementing the node
        transformations for this fix class.

        In most cases, you should only override :py:meth:`fix_node()`.  In
        advanced cases where you need to act on the whole tree globally (for
        instance to collect definitions before replacing anything), then you
        need to reimplement :py:meth:`fix_tree()`.

        This method should return `None` to signal that :py:meth:`fix_node()`
        is to be called on each node, or the transformed tree.

        By default, :py:meth:`fix_tree()` returns `None`.
        """
        return None

    def fix_node(self, node, info):
        r"""
        Transforms a given node to implement the fixes provided by this fix
        class.

        The `info` argument is a :py:class:`latexast.visit.VisitInfo` that
        tells where the node sits in the tree (`info.parent`,
        `info.containing_list`, ...) and its lexical context
        (`info.context.in_math_mode`, ...).

        Subclasses should inspect `node` and return one of either:

        - return `None`: If the present `node` does not need to be transformed
          in any way.  Its children are then visited.

        - return a single node: it replaces the original node, and its children
          are visited next.

        - return a node list, or a string that is parsed into a node list: the
          nodes are used in the place of the original `node`.  They are not
          visited again; use :py:meth:`preprocess()` or
          :py:meth:`preprocess_latex()` on them if they should be.

        This method may raise :py:exc:`DontFixThisNode`, which has exactly the
        same effect as returning `None`.
        """
        return None

    # utilities for subclasses

    def parse_nodes(self, s):
        r"""
        Parse the LaTeX string `s` with the preprocessor's parser and return
        the node list.
        """
        if self.lpp is not None:
            parser = self.lpp.parser
        else:
            parser = get_default_parser()
        return parser.parse_nodes(s)

    def preprocess_latex(self, n):
        r"""
        Return the LaTeX code of the given node(s) after having recursively
        preprocessed a copy of them with the present fix.

        The argument `n` may be `None`, a single node instance, or a node list.

        You may use this in your :py:meth:`fix_node()` implementations to ensure
        that preprocessing acts recursively in your replacement strings.  For
        instance::

          # transform \begin{equation*} .. \end{equation*} -> \[ .. \]
          class MyFix(fix.BaseFix):
            def fix_node(self, n, info):
              if match.environment(n, 'equation*'):
                  # recursively apply fixes to body:
                  return r'\[' + self.preprocess_latex(n.content) + r'\]'
        """
        if n is None:
            return ''
        if not isinstance(n, list):
            n = [n]
        return print_raw(self.preprocess(latexnodes.clone(n)))

    def node_get_arg(self, node, argn):
        r"""
        Return the `argn`-th argument (starting at zero) of the given macro or
        environment node, as an :py:class:`~latexast.nodes.ArgumentNode`, or
        `None` if it is an optional argument that was not given.

        If `node` does not have an argument list (``node.args is None``), then
        :py:exc:`DontFixThisNode` is raised.  This can happen if the bare macro
        is given as a single token argument e.g. to another macro.  Raising
        :py:exc:`DontFixThisNode` is equivalent to returning `None` in
        :py:meth:`fix_node()`.

        If the argument list does not have enough arguments, then an error is
        raised to help detect bugs.
        """
        if node.nodetype not in ('macro', 'environment'):
            raise RuntimeError("internal error: node_get_arg() can only be used on "
                               "macro and environment nodes; not {!r}"
                               .format(node))
        if node.args is None:
            raise DontFixThisNode

        if argn >= len(node.args):
            # not enough arguments
            raise RuntimeError("internal error: not enough arguments for node_get_arg({}): {!r}"
                               .format(argn, node))

        arg = node.args[argn]
        if arg.is_blank():
            return None
        return arg

    def arg_latex(self, node, argn):
        r"""
        Return the LaTeX code of the contents of the `argn`-th argument of
        `node`, without its delimiters, or `None` if the argument was not
        given.
        """
        arg = self.node_get_arg(node, argn)
        if arg is None:
            return None
        return print_raw(arg.content)

    def preprocess_arg_latex(self, node, argn):
        r"""
        Same as :py:meth:`arg_latex()`, after having recursively preprocessed
        the argument contents with the present fix.  Returns an empty string for
        an argument that was not given.
        """
        arg = self.node_get_arg(node, argn)
        if arg is None:
            return ''
        return self.preprocess_latex(arg.content)


class BaseMultiStageFix(BaseFix):
    r"""
    Implement a fix that requires multiple passes through the document.

    For instance, a fix that replaces macros defined in the document first
    needs to run through the document to collect the definitions, and then
    re-run through the document to replace the invocations.

    To implement a multi-stage fix, you simply inherit this class and add
    :py:class:`Stage` objects with :py:meth:`add_stage()`.  Do not
    reimplement :py:meth:`fix_node()` or :py:meth:`preprocess()`: the entire
    processing is left to the individual stages, which are themselves fix
    objects.

    Minimal example:

    .. code-block:: python

        class CountMeStageFix(BaseMultiStageFix):
            def __init__(self):
                super().__init__()

                self.number_of_countmes = 0

                self.add_stage(self.CountMacros(self))
                self.add_stage(self.ReplaceMacros(self))

            class CountMacros(BaseMultiStageFix.Stage):
                def fix_node(self, n, info):
                    if match.macro(n, 'countme'):
                        self.parent_fix.number_of_countmes += 1
                    return None

            class ReplaceMacros(BaseMultiStageFix.Stage):
                def fix_node(self, n, info):
                    if match.macro(n, 'numberofcountme'):
                       return str(self.parent_fix.number_of_countmes)
                    return None
    """
    def __init__(self):
        super().__init__()
        self._fix_stages = []

    class Stage(BaseFix):
        """
        A specific stage in a multi-stage fix.  A "stage" is itself a fix object
        (this class inherits :py:class:`BaseFix`) so you can reimplement the
        usual `fix_node()` (see :py:class:`BaseFix`).

        .. py:attribute:: parent_fix

            The parent fix object (the one that inherits
            :py:class:`BaseMultiStageFix`).

        The :py:meth:`initialize()` and :py:meth:`finalize()` methods are
        honored, but they are called for all stages before any stage is run
        and after all stages have run, respectively.  The methods
        :py:meth:`stage_start()` and :py:meth:`stage_finish()`, in contrast, are
        called immediately before and after the present stage is run.
        """
        def __init__(self, parent_fix):
            super().__init__()
            self.parent_fix = parent_fix

        def stage_start(self):
            """
            This method is called immediately before this stage is run.
            """
            pass

        def stage_finish(self):
            """
            This method is called immediately after this stage is run.
            """
            pass

        def stage_name(self):
            """
            Return a short name that describes this stage within this fix (by default,
            this is the stage's simple class name).
            """
            return self.__class__.__name__

    def add_stage(self, stage):
        if not hasattr(self, '_basefix_constr_called'):
            raise RuntimeError(
                "BaseMultiStageFix: You didn't call super().__init__() before add_stage()")

        if self.lpp is not None:
            stage.set_lpp(self.lpp)
        self._fix_stages.append(stage)

    def set_lpp(self, lpp):
        super().set_lpp(lpp)
        for stage in self._fix_stages:
            stage.set_lpp(lpp)

    def initialize(self):
        """
        Calls all stages' `initialize()` members in stage sequence.  Don't forget to
        call the base class' implementation if you reimplement this method.
        """
        for stage in self._fix_stages:
            stage.initialize()

    def finalize(self):
        """
        Calls all stages' `finalize()` members in stage sequence.  Don't forget to
        call the base class' implementation if you reimplement this method.
        """
        for stage in self._fix_stages:
            stage.finalize()

    def preprocess(self, tree):
        for stage in self._fix_stages:
            logger.debug("%s: running stage ‘%s’", self.fix_name(), stage.stage_name())
            stage.stage_start()
            tree = stage.preprocess(tree)
            stage.stage_finish()

        return tree
