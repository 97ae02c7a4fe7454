import pytest

from native.nodes import Array, NodeConversionError, Object, to_node


def test_to_node_builds_tree():
    node = to_node(
        {
            "@type": "File",
            "Body": [{"@type": "Ident", "Name": "x", "Pos": 3}],
            "Ratio": 0.5,
            "Exported": False,
            "Doc": None,
        }
    )

    assert isinstance(node, Object)
    assert isinstance(node["Body"], Array)
    assert isinstance(node["Body"][0], Object)
    assert node["Body"][0]["Pos"] == 3
    assert node["Ratio"] == 0.5
    assert node["Exported"] is False
    assert node["Doc"] is None


def test_to_node_keeps_scalars():
    assert to_node("x") == "x"
    assert to_node(7) == 7
    assert to_node(None) is None
    assert to_node(1.0) == 1.0 and isinstance(to_node(1.0), float)


def test_to_node_rejects_non_string_keys():
    with pytest.raises(NodeConversionError, match="keys must be strings"):
        to_node({1: "x"})


def test_to_node_rejects_unsupported_values():
    with pytest.raises(NodeConversionError, match="unsupported type: bytes"):
        to_node({"raw": [b"\x00"]})
