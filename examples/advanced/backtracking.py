"""Keep several points in time alive while trying alternatives.

Spans are immutable, so a parser can hold on to the input it started from,
try one rule, and fall back to another without restoring any state. Each
alternative reports positions relative to the same original input.
"""

from spanned import CompareResult, Spanned, SplitError

SOURCE = "let x = 1\nconst y = 2\nvar z = 3\n"
KEYWORDS = ("let", "const")


def keyword(span: Spanned[str]) -> tuple[Spanned[str], str] | None:
    for kw in KEYWORDS:
        if span.compare(kw) is CompareResult.OK:
            rest, taken = span.take_split(len(kw))
            return rest, taken.fragment
    return None


def identifier(span: Spanned[str]) -> tuple[Spanned[str], Spanned[str]]:
    return span.split_at_position1_complete(lambda c: not c.isalnum(), "identifier")


span = Spanned(SOURCE, True)
while span:
    line_start = span
    match = keyword(span)
    if match is None:
        # Backtrack: line_start is untouched by the failed attempt
        rest, word = identifier(line_start)
        print(f"{line_start.location}: unknown keyword {word.fragment!r}")
    else:
        rest, kw = match
        try:
            rest, name = identifier(rest.skip(1))
        except SplitError as exc:
            print(f"{exc.span.location}: expected a name")
            break
        print(f"{name.location}: {kw} {name.fragment}")
    rest, _ = rest.split_at_position_complete(lambda c: c == "\n")
    span = rest.skip(1) if rest else rest
