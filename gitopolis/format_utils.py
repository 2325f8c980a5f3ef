"""
Display formatting for exec commands.

format_for_display builds the command echoed in each repo header. It is
cosmetic: it never feeds execution, and the quoting is a best-effort
approximation of a POSIX shell. cmd.exe and PowerShell quote differently,
so the text is not guaranteed to paste back into every shell.

The per-token quoting applies only to multi-token commands. A single
token is echoed verbatim rather than quoted, since it is shell source
the user wrote (e.g. 'git status | grep x') and quoting it would show
a command that differs from what runs.
"""

from typing import Sequence

# Characters a POSIX shell would treat specially in an unquoted word
SHELL_SPECIAL_CHARS = frozenset('|&;<>()$`\\"\'*?[]{}!#')


def needs_quoting(token: str) -> bool:
    if not token:
        return True
    return any(c.isspace() or c in SHELL_SPECIAL_CHARS for c in token)


def quote_for_display(token: str) -> str:
    """
    Quote one token for display if it needs it.

    Single quotes are preferred. Tokens that themselves contain a single
    quote are double-quoted with backslash and double quote escaped.
    """
    if not needs_quoting(token):
        return token
    if "'" not in token:
        return f"'{token}'"
    escaped = token.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def _format_token(token: str) -> str:
    # --flag=value quotes only the value, e.g. --format='%h %s'
    if token.startswith('--') and '=' in token:
        flag, value = token.split('=', 1)
        if not needs_quoting(flag):
            return f"{flag}={quote_for_display(value) if value else ''}"
    return quote_for_display(token)


def format_for_display(tokens: Sequence[str]) -> str:
    """
    Render command tokens as a readable command line.

    A single token is shown verbatim, because it is handed to the shell
    as-is and may rely on pipes or redirection.

    Examples:
        ['git', 'status']                  -> git status
        ['git', 'commit', '-m', 'a b']     -> git commit -m 'a b'
        ['git', 'log', '--format=%h %s']   -> git log --format='%h %s'
        ['git status | grep x']            -> git status | grep x
    """
    if len(tokens) == 1:
        return tokens[0]
    return ' '.join(_format_token(t) for t in tokens)
