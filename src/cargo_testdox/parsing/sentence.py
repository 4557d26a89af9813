from typing import Optional

FN_MARKER = "_fn_"

def humanize(words: str) -> str:
    return words.replace("_", " ")

def prettify(identifier: str) -> str:
    """
    Turn a test identifier into a sentence.

    Only the last ``::`` segment is used. Underscores become spaces, except in
    the part before a ``_fn_`` marker, which is kept as written:

        parse_line_fn_parses_a_line  ->  parse_line parses a line
    """
    name = identifier.rsplit("::", 1)[-1]
    fn_name, marker, rest = name.partition(FN_MARKER)
    if not marker:
        return humanize(name)
    return f"{fn_name} {humanize(rest)}"

def prettify_module(module: str) -> Optional[str]:
    # a trailing `tests`/`test` module is the usual #[cfg(test)] wrapper
    parts = [p for p in module.split("::") if p]
    if parts and parts[-1] in ("tests", "test"):
        parts.pop()
    if not parts:
        return None
    return "::".join(parts)
