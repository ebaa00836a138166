from pullcore.parser import parse_level_str
from pullcore.render import render_ascii

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def test_render_start_layout():
    b = parse_level_str(LVL)
    assert render_ascii(b) == "#####\n#@--#\n#-$-#\n#-.-#\n#####"


def test_render_other_layout():
    b = parse_level_str(LVL)
    txt = render_ascii(b, boxes=b.goals, player=7)
    assert txt.splitlines()[1] == "#-@-#"
    assert txt.splitlines()[3] == "#-*-#"


def test_render_parses_back():
    b = parse_level_str(LVL)
    assert parse_level_str(render_ascii(b)) == b
