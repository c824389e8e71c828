# minish

minish is the front end of a small interactive shell. It takes a command
line and does the following:

- splits it into tokens;
- expands variables, quotes, tildes and escapes inside words;
- checks where redirections and pipes are placed;
- cuts the token list into pipeline segments;
- opens the files that the redirections name.

It has no dependencies outside the standard library. The `minish.signals`
module uses `termios`, so the package needs a POSIX system.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `minish.tokens`

- **`TokenType`** lists the kinds of token:
  - `WORD`
  - `PIPE`
  - `REDIRECT_IN`, `REDIRECT_OUT`, `REDIRECT_APPEND`
  - `HEREDOC`
  - `SEMIC`
  - `HEREDOC_PROCESSED`
- **`Token`** is a dataclass with three fields:
  - `type`
  - `value`
  - `quote_mode`, which is `False` unless set.
- **`ShellEnv`** holds two things:
  - `variables`, a dict;
  - `exit_code`, the status of the last command.

  `ShellEnv.get_var(name)` returns the value of a variable, or `None` if it
  is not set. `ShellEnv.home()` returns `HOME`, or `None` if it is not set.

### `minish.expansion`

Each of these functions takes the line and a position. It returns the
resulting text together with the position just past what it read.

- **`expand_env(line, pos, env)`** expands the `$` construct at `pos`:
  - `$?` gives the exit code.
  - `$'...'` resolves ANSI-C escapes.
  - `$NAME` gives the value of the variable. A variable that is not set
    expands to `""`.
- **`process_quoted(line, pos, quote, env)`** reads a single-quoted or
  double-quoted section:
  - Inside double quotes, `$NAME` and `$?` are expanded.
  - Inside single quotes, everything is kept as written.
  - A quote that is never closed raises `ValueError`.
- **`expand_tilde(line, pos, env)`** handles a `~`:
  - It becomes `HOME` when it stands alone, comes before `/`, or comes
    before a space.
  - Otherwise it stays as `~`. It also stays as `~` when `HOME` is not set.
- **`read_backslash(line, pos)`** takes the character after the backslash
  literally. The pair `\\` directly before `$` gives one backslash and leaves
  the `$` to be expanded.

Two helpers resolve escapes without a position:

- **`ansi_c_quote(text)`** resolves the backslash escapes in `text`.
- **`get_escape(char)`** maps one escape character:
  - Handled: `n`, `t`, `r`, `a`, `b`, `f`, `v`, `\`, `'`, `"` and `$`.
  - Any other character stands for itself.

### `minish.lexer`

- **`tokenize(line, env)`** returns a list of `Token`. It recognises:
  - words
  - `|`
  - `<`, `>` and `>>`
  - `;`
  - `<<` followed by its delimiter

  The heredoc delimiter is read literally, without quote handling or
  expansion. If a word has an unclosed quote, lexing stops there: that word
  is dropped and the tokens read before it are returned.
- **`read_word(line, pos, env)`** reads one word.
- **`read_delimiter(line, pos)`** reads a heredoc delimiter.
- **`skip_whitespace(line, pos)`** moves past spaces and tabs.

### `minish.syntax`

**`validate_syntax(tokens, env)`** raises `ShellSyntaxError` in these cases:

- a redirection or `<<` is not followed by a word;
- the line starts with a pipe;
- a pipe ends the line;
- a pipe is followed by another pipe.

The error's `token` attribute holds the offending token. When the input is
`newline`, that is the token reported.

On an error, `env.exit_code` is set to 258. When a non-empty list is valid,
`env.exit_code` is reset to 0.

### `minish.parsing`

- **`split_pipeline(tokens)`** takes the tokens before the first `;` and
  splits them at each `|` into segments. The pipe tokens are dropped. It
  always returns at least one segment.
- **`segment_args(segment)`** returns the command's argument words. It
  leaves out redirection targets and heredoc parts.
- **`count_args(segment)`** returns how many such words there are.
- **`apply_redirections(segment, in_fd, out_fd, read_heredoc)`** works
  through the redirections in order and returns the final
  `(in_fd, out_fd)`:
  - `>` opens its target with truncation; `>>` opens it for appending. Both
    create the file with mode `0o644`.
  - `<` opens its target for reading.
  - `<<` with a delimiter calls `read_heredoc(delimiter, quoted)` to get the
    body, and feeds that body through a pipe.
  - A `HEREDOC_PROCESSED` token carries a descriptor number in its value,
    which becomes the new input.

  A descriptor that gets replaced is closed, unless it is standard input or
  standard output. A file that cannot be opened raises `RedirectionError`.
  Its `path` and `error` attributes say which file failed and why.

### `minish.signals`

These functions set the signal dispositions for each phase of the shell:

| Function | Phase |
| --- | --- |
| `signal_mode_read()` | reading input |
| `signal_mode_command()` | running a command |
| `set_signal_heredoc()` | collecting a heredoc |
| `set_signal_pipe()` | running a pipeline |
| `set_signal_backslash()` | restores the default SIGQUIT action |
| `set_for_cat()` | ignores SIGQUIT |

**`turn_off_echo()`** stops the terminal from echoing control characters.
It returns `False` when standard input is not a terminal.

### `minish.strutil`

This module holds string helpers with C-library semantics, which the other
modules rely on:

- `atoi`
- `itoa`
- `split`
- `strtrim`
- `strnstr`
- `strncmp`
- `strcmp`
- `substr`

## Example

```python
from minish.tokens import ShellEnv
from minish.lexer import tokenize
from minish.syntax import validate_syntax
from minish.parsing import split_pipeline, segment_args

env = ShellEnv({"USER": "alice", "HOME": "/home/alice"})
tokens = tokenize('echo "hi $USER" ~/notes | wc -l', env)
validate_syntax(tokens, env)
for segment in split_pipeline(tokens):
    print(segment_args(segment))
# ['echo', 'hi alice', '/home/alice/notes']
# ['wc', '-l']
```

## What it does not do

minish is a library for the parsing and redirection steps only. It does not
include:

- a shell command or a prompt loop;
- command lookup or running programs;
- builtins such as `cd`, `export` or `exit`;
- line editing or history.

Heredoc bodies are not read from the terminal by minish. The caller supplies
them through the `read_heredoc` callback of `apply_redirections`.