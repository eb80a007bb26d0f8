"""Track line, column, and byte offset while consuming input."""

from spanned import Spanned

span = Spanned('{"hello": "world \U0001f64c"}\n{"next": 1}', True)
print(span.line, span.col, span.byte_offset)  # 1 1 0

rest, taken = span.split_at_position_complete(lambda c: c == "\n")
print(taken.fragment)  # {"hello": "world 🙌"}
print(rest.line, rest.col, rest.byte_offset)  # 1 21 23

after_newline = rest.skip(1)
print(after_newline.line, after_newline.col)  # 2 1

# Counting columns in bytes instead of characters
print(Spanned("\U0001f64c", True).skip(1).col)  # 2
print(Spanned("\U0001f64c", False).skip(1).col)  # 5
