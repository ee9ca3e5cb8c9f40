from asm14.macros import expand_macros


def test_macro_call_is_replaced_by_body():
    lines = ["mcr m1\n", " inc r2\n", " mov A, r1\n", "endmcr\n", "m1\n", "stop\n"]
    assert expand_macros(lines) == [" inc r2\n", " mov A, r1\n", "stop\n"]


def test_macro_can_be_called_several_times():
    lines = ["mcr twice\n", "clr r1\n", "endmcr\n", "twice\n", "twice\n"]
    assert expand_macros(lines) == ["clr r1\n", "clr r1\n"]


def test_lines_without_macros_pass_through_unchanged():
    lines = ["MAIN: mov r3, r4\n", "\n", "; comment\n", "stop\n"]
    assert expand_macros(lines) == lines


def test_empty_macro_expands_to_nothing():
    lines = ["mcr e\n", "endmcr\n", "e\n", "rts\n"]
    assert expand_macros(lines) == ["rts\n"]


def test_definition_lines_are_not_emitted_without_call():
    lines = ["mcr unused\n", "inc r1\n", "endmcr\n", "stop\n"]
    assert expand_macros(lines) == ["stop\n"]


def test_first_definition_wins():
    lines = [
        "mcr m\n", "inc r1\n", "endmcr\n",
        "mcr m\n", "dec r1\n", "endmcr\n",
        "m\n",
    ]
    assert expand_macros(lines) == ["inc r1\n"]


def test_two_macros_expand_independently():
    lines = [
        "mcr a\n", "inc r1\n", "endmcr\n",
        "mcr b\n", "dec r2\n", "endmcr\n",
        "b\n", "a\n",
    ]
    assert expand_macros(lines) == ["dec r2\n", "inc r1\n"]


def test_lone_mcr_keyword_is_kept():
    lines = ["mcr\n", "stop\n"]
    assert expand_macros(lines) == lines


def test_unknown_single_word_is_kept():
    lines = ["mcr m\n", "inc r1\n", "endmcr\n", "other\n"]
    assert expand_macros(lines) == ["other\n"]