import re

from latexast import match
from latexast import nodes as latexnodes

from latexast.fixes import BaseFix


_rx_comment = re.compile(r'%[^\r\n]*(\r?\n[ \t]*)?')

_rx_comment_run = re.compile(r'(?:%[^\r\n]*\r?\n[ \t]*)*%[^\r\n]*(\r?\n[ \t]*)?')


class RemoveComments(BaseFix):
    r"""
    Remove all LaTeX comments from the latex document.

    Arguments:

    - `leave_percent`: If `True` (the default), then a full LaTeX comment is
      replaced by an empty comment, i.e., a single percent sign and whatever
      whitespace followed the comment (the whitespace is anyways ignored by
      LaTeX).  If `False`, then the comment and following whitespace is removed
      entirely.

    - `collapse`: If `True` (the default), a run of consecutive comment lines
      is replaced by a single empty comment, which keeps the whitespace that
      followed the last comment of the run.  Only used if `leave_percent` is
      set.

    Comments written between a macro and its argument, as in
    ``\emph% note`` followed by ``{text}`` on the next line, are removed in
    the same way.
    """
    def __init__(self, leave_percent=True, collapse=True):
        super().__init__()
        self.leave_percent = leave_percent
        self.collapse = collapse

    def fix_node(self, n, info):

        if match.argument(n) and '%' in n.pre_space:
            return latexnodes.ArgumentNode(n.content, open_mark=n.open_mark,
                                           close_mark=n.close_mark,
                                           pre_space=self._fix_space(n.pre_space),
                                           position=n.position)

        if not match.comment(n):
            return None

        if not self.leave_percent:
            return [] # remove entirely.

        if self.collapse and info.containing_list is not None:
            lst = info.containing_list
            if info.index + 1 < len(lst) and match.comment(lst[info.index + 1]):
                # the next comment takes our place
                return []

        return latexnodes.CommentNode('', n.post_space, position=n.position)

    def _fix_space(self, s):
        if not self.leave_percent:
            return _rx_comment.sub('', s)
        rx = _rx_comment_run if self.collapse else _rx_comment
        return rx.sub(lambda m: '%' + (m.group(1) or ''), s)
