"""Unit tests for node classification and children resolution.

The classifier must be total: every value, however malformed, classifies
without raising, and slot producers are invoked exactly once per resolution.
"""

import unittest

from rendertreelib import (
    ComponentDescriptor,
    ComponentInstance,
    ComponentRef,
    Element,
    Fragment,
    EMPTY,
    NodeKind,
    classify,
    resolve_children,
)
from rendertreelib.adapters import NativeRenderAdapter
from rendertreelib.core.classifier import ChildrenShape, normalize_children
from rendertreelib.core.node import RenderNode


def is_native(value):
    return isinstance(value, RenderNode)


class TestClassify(unittest.TestCase):
    """Test native node classification."""

    def setUp(self):
        self.child = ComponentDescriptor(name='Child')

    def test_empty_and_none(self):
        self.assertIs(classify(EMPTY).kind, NodeKind.EMPTY)
        self.assertIs(classify(None).kind, NodeKind.EMPTY)

    def test_element(self):
        span = Element('span')
        result = classify(Element('div', [span]))
        self.assertIs(result.kind, NodeKind.ELEMENT)
        self.assertEqual(result.children, [span])

    def test_component_reference(self):
        ref = ComponentRef(self.child)
        result = classify(ref)
        self.assertIs(result.kind, NodeKind.COMPONENT)
        self.assertEqual(result.name, 'Child')
        self.assertIs(result.descriptor, self.child)
        self.assertIsNone(result.instance)
        self.assertFalse(result.is_instantiated)

    def test_instantiated_component_reference(self):
        ref = ComponentRef(self.child)
        ref.instance = ComponentInstance(uid=7, vnode=ref)
        result = classify(ref)
        self.assertTrue(result.is_instantiated)
        self.assertIs(result.instance, ref.instance)

    def test_component_without_descriptor(self):
        result = classify(ComponentRef(None))
        self.assertIs(result.kind, NodeKind.COMPONENT)
        self.assertIsNone(result.name)

    def test_non_string_name_is_ignored(self):
        result = classify(ComponentRef(ComponentDescriptor(name=42)))
        self.assertIsNone(result.name)

    def test_fragment(self):
        a, b = Element('a'), Element('b')
        result = classify(Fragment([a, b]))
        self.assertIs(result.kind, NodeKind.FRAGMENT)
        self.assertEqual(result.children, (a, b))

    def test_malformed_values_are_opaque(self):
        for value in (42, "text", object(), {'type': 'div'}, [Element('div')]):
            with self.subTest(value=value):
                self.assertIs(classify(value).kind, NodeKind.ELEMENT)


class TestNormalizeChildren(unittest.TestCase):
    """Test children reference normalization."""

    def test_absent(self):
        self.assertIs(normalize_children(None, is_native).shape, ChildrenShape.NONE)

    def test_sequence_drops_non_nodes(self):
        a = Element('a')
        resolved = normalize_children([a, "text", None, 3], is_native)
        self.assertIs(resolved.shape, ChildrenShape.LIST)
        self.assertEqual(resolved.nodes, (a,))

    def test_single_node(self):
        a = Element('a')
        resolved = normalize_children(a, is_native)
        self.assertIs(resolved.shape, ChildrenShape.SINGLE)
        self.assertEqual(resolved.nodes, (a,))

    def test_producer_invoked_once(self):
        calls = []
        a, b = Element('a'), Element('b')

        def producer():
            calls.append(1)
            return [a, b]

        resolved = normalize_children(producer, is_native)
        self.assertEqual(len(calls), 1)
        self.assertTrue(resolved.produced)
        self.assertIs(resolved.shape, ChildrenShape.LIST)
        self.assertEqual(resolved.nodes, (a, b))

    def test_producer_yielding_single_node(self):
        a = Element('a')
        resolved = normalize_children(lambda: a, is_native)
        self.assertIs(resolved.shape, ChildrenShape.SINGLE)

    def test_producer_yielding_garbage(self):
        resolved = normalize_children(lambda: 12, is_native)
        self.assertIs(resolved.shape, ChildrenShape.NONE)
        self.assertTrue(resolved.produced)

    def test_named_slot_mapping(self):
        a = Element('a')
        resolved = normalize_children({'default': lambda: [a], 'footer': lambda: []}, is_native)
        self.assertEqual(resolved.nodes, (a,))

    def test_mapping_without_default_slot(self):
        resolved = normalize_children({'footer': lambda: []}, is_native)
        self.assertFalse(resolved)

    def test_unresolvable_reference(self):
        for ref in (12, "text", 3.5):
            with self.subTest(ref=ref):
                self.assertIs(normalize_children(ref, is_native).shape, ChildrenShape.NONE)

    def test_producer_errors_propagate(self):
        def boom():
            raise RuntimeError("slot failed")

        with self.assertRaises(RuntimeError):
            normalize_children(boom, is_native)


class TestResolveChildren(unittest.TestCase):
    """Test node-level children resolution through the native adapter."""

    def test_fragment_resolves_to_its_nodes(self):
        a = Element('a')
        resolved = resolve_children(Fragment([a, "junk"]))
        self.assertIs(resolved.shape, ChildrenShape.LIST)
        self.assertEqual(resolved.nodes, (a,))

    def test_empty_has_no_children(self):
        self.assertFalse(resolve_children(EMPTY))

    def test_component_slot_children(self):
        a = Element('a')
        ref = ComponentRef(ComponentDescriptor(name='X'), children=lambda: a)
        self.assertEqual(resolve_children(ref).nodes, (a,))

    def test_opaque_value_has_no_children(self):
        self.assertFalse(NativeRenderAdapter().resolve_children(object()))


if __name__ == '__main__':
    unittest.main()
