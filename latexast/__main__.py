import os.path
import sys
import json
import argparse
import logging

import colorlog

logger = logging.getLogger('latexast.__main__')

import yaml

from . import __version__ as version_str

from pylatexenc import latexwalker # catch latexwalker.LatexWalkerParseError

from .errors import LatexAstError
from .preprocessor import LatexPreprocessor
from .printer import print_raw, to_string
from . import lint as latexlint


_CONFIG_FNAME = 'latexast.yml'


def setup_logging(level):
    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.TTYColoredFormatter(
        stream=sys.stderr,
        fmt='%(log_color)s%(levelname)-8s: %(message)s' #'  [%(name)s]'
    ))

    root = colorlog.getLogger()
    root.addHandler(handler)

    root.setLevel(level)



_config_template = r"""
# latexast config
#
# This is YAML syntax -- google "YAML tutorial" to get a quick intro.
# Be careful with spaces since indentation is important.

# signature tables to load, among latex2e, amsmath, xparse, hyperref and
# graphicx (default: all of them)
#packages: ['latex2e', 'amsmath']

# argument signatures of additional macros and environments, so that the
# parser attaches their arguments
macros:
  # \ket{\psi}
  ket: 'm'
environments: {}

# read '@' (at_letter), resp. '_' and ':' (expl3), as part of macro names in
# the whole document, not only after \makeatletter resp. \ExplSyntaxOn
#at_letter: false
#expl3: false

# specify list of fixes to apply, in the given order
fixes:

  # remove all comments
  - 'latexast.fixes.comments.RemoveComments'

  # expand the \newcommand's and \newenvironment's that the document
  # defines itself
  - 'latexast.fixes.newcommand.Expand'

  # Expand some macros.  If the macro has arguments, specify them in the
  # 'signature:' key (e.g. 's o m' for an optional star, an optional
  # argument and a mandatory argument).  The argument values are available
  # via the placeholders #1, #2, etc.  Make sure to use single quotes for
  # strings that contain \ backslashes.
  - name: 'latexast.fixes.macro_subst.Subst'
    config:
      macros:
        # \tr         -->  \operatorname{tr}
        tr: '\operatorname{tr}'
        # \braket{\psi}{\phi}  -->  \langle{\psi}\vert{\phi}\rangle
        braket:
          signature: 'm m'
          repl: '\langle{#1}\vert{#2}\rangle'

# lint rules to run with --lint (default: all of them)
lint:
  - 'no-def'
  - 'no-tex-display-math'
  - 'obsolete-packages'
""".lstrip() # strip leading '\n'


class NewConfigTemplate(argparse.Action):
    def __init__(self, **kwargs):
        super().__init__(help='create a new template {} file and exit'.format(_CONFIG_FNAME),
                         nargs=0,
                         **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        # create new YaML template and exit
        cfgfile = _CONFIG_FNAME
        if os.path.exists(cfgfile):
            raise ValueError("The file {} already exists. I won't overwrite it."
                             .format(cfgfile))
        with open(cfgfile, 'w') as f:
            f.write(_config_template)
        # logger hasn't been set up yet.
        sys.stderr.write(
            ("Wrote template config file {}.  Please edit to your "
             "liking and then run latexast.\n").format(cfgfile)
        )
        sys.exit(0)


def load_config(fname, required=False):
    r"""
    Load the YAML configuration file `fname`.  If the file does not exist,
    an empty configuration is returned, unless `required` is set, in which
    case `FileNotFoundError` is raised.
    """
    if not required and not os.path.exists(fname):
        return {}
    with open(fname) as f:
        config = yaml.load(f, Loader=yaml.FullLoader)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError("Invalid configuration file ‘{}’, expected a mapping"
                         .format(fname))
    return config


def format_tree(tree, fmt):
    if fmt == 'text':
        return to_string(tree)
    if fmt == 'json':
        return json.dumps(tree.to_json_object(), indent=2) + '\n'
    return print_raw(tree)


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog='latexast',
        description='Parse a LaTeX document, apply fixes and lint rules, and '
        'print the result.',
        add_help=False # custom help option
        )

    parser.add_argument('fname', metavar='file', nargs='?',
                        help='input LaTeX file (default: standard input)')

    parser.add_argument('-c', '--config', dest='config',
                        action='store', default='',
                        help='config file (YAML) to use instead of {}'.format(_CONFIG_FNAME))

    parser.add_argument('-f', '--format', dest='format',
                        choices=('latex', 'text', 'json'), default='latex',
                        help='output format: LaTeX code (default), plain text, '
                        'or the syntax tree in JSON')

    parser.add_argument('--lint', dest='lint', action='store_true', default=False,
                        help='report questionable constructs in the input document')

    parser.add_argument('--strict', dest='strict', action='store_true', default=False,
                        help='fail on syntax errors instead of recovering from them')

    parser.add_argument('-o', '--output', dest='output_fname',
                        default=None,
                        help='output file name (default: standard output)')

    parser.add_argument('-v', '--verbose', dest='verbosity', default=logging.INFO,
                        action='store_const', const=logging.DEBUG,
                        help='verbose mode, see what\'s going on in more detail')

    parser.add_argument('--new', action=NewConfigTemplate)

    parser.add_argument('--version', action='version',
                        version='%(prog)s {}'.format(version_str))
    parser.add_argument('--help', action='help',
                        help='show this help message and exit')

    args = parser.parse_args(argv)


    setup_logging(level=args.verbosity)


    configyml = args.config or _CONFIG_FNAME
    config_dir = os.path.dirname(os.path.abspath(configyml))

    try:
        config = load_config(configyml, required=bool(args.config))
    except FileNotFoundError:
        logger.error("Cannot find configuration file ‘%s’.  "
                     "Use --new to create a template config file.", configyml)
        sys.exit(1)

    if args.fname:
        with open(args.fname) as f:
            source = f.read()
        input_source = 'file ‘{}’'.format(args.fname)
    else:
        source = sys.stdin.read()
        input_source = 'standard input'

    num_findings = 0

    try:

        pp = LatexPreprocessor(
            config_dir=config_dir,
            packages=config.get('packages'),
            macros=config.get('macros'),
            environments=config.get('environments'),
            at_letter=bool(config.get('at_letter', False)),
            expl3=bool(config.get('expl3', False)),
            tolerant_parsing=not args.strict,
        )

        pp.install_fixes_from_config(config.get('fixes') or [])

        pp.initialize()

        tree = pp.parse(source, input_source=input_source)

        if args.lint:
            rules = latexlint.get_rules(config.get('lint'))
            for finding in latexlint.lint(tree, rules):
                logger.warning("%s", finding.format(source))
                num_findings += 1

        tree = pp.preprocess(tree)

        result = format_tree(tree, args.format)

        pp.finalize()

    except LatexAstError as e:
        logger.error("%s%s: %s", type(e).__name__,
                     ' (\\{})'.format(e.macroname) if getattr(e, 'macroname', None) else '',
                     e)
        sys.exit(1)
    except latexwalker.LatexWalkerParseError as e:
        logger.error("Parse error! %s", e)
        sys.exit(1)

    if args.output_fname:
        with open(args.output_fname, 'w') as f:
            f.write(result)
    else:
        sys.stdout.write(result)

    if num_findings:
        logger.info("%d problem(s) found", num_findings)
        sys.exit(1)



def run_main():

    try:

        main()

    except Exception:
        import traceback
        traceback.print_exc()
        import pdb
        pdb.post_mortem()
        sys.exit(255)


if __name__ == "__main__":

    run_main() # easier to debug
