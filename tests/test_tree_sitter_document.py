import pytest

from stylefix.tree_sitter_support import TreeSitterDocument, grammar_for_ext


@pytest.mark.parametrize("ext, grammar", [
    ("tsx", "tsx"),
    (".jsx", "tsx"),
    ("js", "tsx"),
    ("mjs", "tsx"),
    ("ts", "typescript"),
    (".MTS", "typescript"),
    ("cts", "typescript"),
])
def test_grammar_for_ext(ext, grammar):
    assert grammar_for_ext(ext) == grammar


def test_positions():
    doc = TreeSitterDocument("a;\nconst b = 1;\n", "ts")
    assert doc.position_of(0) == (1, 1)
    assert doc.position_of(3) == (2, 1)
    assert doc.position_of(9) == (2, 7)


def test_char_ranges_with_multibyte_text():
    text = "const s = 'ü'; f(x);"
    doc = TreeSitterDocument(text, "ts")
    call = doc.root_node.named_children[1].named_children[0]
    assert call.type == "call_expression"
    start, end = doc.get_node_range(call)
    assert text[start:end] == "f(x)"
    assert doc.get_node_text(call) == "f(x)"


def test_walk_tree_is_preorder():
    doc = TreeSitterDocument("f(a);", "ts")
    types = [n.type for n in doc.walk_tree()]
    assert types[0] == "program"
    assert types.index("call_expression") < types.index("arguments")


def test_errors():
    doc = TreeSitterDocument("const = ;", "ts")
    assert doc.has_error()
    assert doc.get_errors()
    assert not TreeSitterDocument("const a = 1;", "ts").has_error()
