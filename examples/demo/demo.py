"""
sexpfmt walkthrough

Demonstrates the four buffer commands:
1. Format a whole buffer
2. Expand the list around the cursor
3. Collapse it back onto one line
4. Override the skip table per call

Run: pip install -e . && python examples/demo/demo.py
"""

from sexpfmt import (
    Buffer,
    FormatConfig,
    SkipTable,
    collapse_to_one_line,
    expand_to_multi_line,
    format_buffer,
)

print("=== sexpfmt demo ===\n")

source = """(defun greet (name)
  "Say hello to NAME." (let ((msg (format "Hello, %s" name))) (when (> (length name) 0) (message msg)) msg))
"""

config = FormatConfig(indent=True)

# 1. Whole buffer
buf = Buffer(source)
format_buffer(buf, config)
print("1. format_buffer")
print(buf.text)

# 2. Expand the list around the cursor
flat = "(setq items (list (car pairs) (cdr pairs) (length pairs)))"
buf = Buffer(flat, point=flat.index("list"))
expand_to_multi_line(buf, config)
print("2. expand_to_multi_line at `list`")
print(buf.text, "\n")

# 3. Collapse it again
collapse_to_one_line(buf, config, recursive=True)
print("3. collapse_to_one_line")
print(buf.text, "\n")

# 4. Per-call skip table
custom = FormatConfig(skip_table=SkipTable([("list", 0)]), indent=True)
buf = Buffer(flat, point=flat.index("list"))
expand_to_multi_line(buf, custom)
print("4. expand_to_multi_line with list -> 0")
print(buf.text)

print("\n=== done ===")
