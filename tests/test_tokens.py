from minish.tokens import ShellEnv, Token, TokenType


def test_token_defaults_and_fields():
    token = Token(TokenType.PIPE, "|")
    assert token.value == "|"
    assert token.type is TokenType.PIPE
    assert token.quote_mode is False


def test_token_equality():
    assert Token(TokenType.WORD, "ls") == Token(TokenType.WORD, "ls")
    assert not Token(TokenType.WORD, "ls") == Token(TokenType.WORD, "cat")


def test_tokens_of_different_types_differ():
    pipe = Token(TokenType.PIPE, "|")
    word = Token(TokenType.WORD, "|")
    assert not pipe == word
    assert pipe.type is not word.type


def test_get_var_found():
    env = ShellEnv({"USER": "alice", "PATH": "/bin"})
    assert env.get_var("USER") == "alice"


def test_get_var_missing():
    env = ShellEnv({"HOME": "/home/alice"})
    assert env.get_var("HOM") is None
    assert env.get_var("HOMEDIR") is None


def test_get_var_empty_value():
    env = ShellEnv({"EMPTY": ""})
    assert env.get_var("EMPTY") == ""


def test_home():
    assert ShellEnv({"HOME": "/home/alice"}).home() == "/home/alice"
    assert ShellEnv({}).home() is None


def test_exit_code_default_and_update():
    env = ShellEnv()
    assert env.exit_code == 0
    env.exit_code = 258
    assert env.exit_code == 258


def test_envs_do_not_share_variables():
    first = ShellEnv()
    second = ShellEnv()
    first.variables["X"] = "1"
    assert second.get_var("X") is None