"""Tests for direct and naming-convention references."""

from helpers import declared

from domain_model_generator.config.options import ReflectionSettings
from domain_model_generator.core.reflection.reference_resolver import (
    ReferenceResolver,
    match_foreign_key_name,
    snake_to_pascal,
)
from domain_model_generator.models.schema import (
    DIRECT,
    FUNCTION,
    GENERIC,
    INDIRECT,
    Attribute,
    TypeDescriptor,
    TypeRef,
)


def _attr(name, ref):
    return Attribute(name=name, type_name=ref.display(), type_ref=ref)


class TestDirectReferences:

    def test_declared_eligible_type(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        attr = _attr("TestClass1", declared(public_class))
        assert resolver.resolve(direct_reference, attr) == (public_class, DIRECT)

    def test_declared_type_outside_eligible_set(self, public_class, direct_reference):
        resolver = ReferenceResolver([direct_reference])
        assert resolver.resolve_reference(direct_reference, _attr("TestClass1", declared(public_class))) is None

    def test_generic_wrapper_of_eligible_type(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        ref = TypeRef("List", kind=GENERIC, arguments=[declared(public_class)])
        assert resolver.resolve_reference(direct_reference, _attr("Items", ref)) is public_class

    def test_second_generic_argument(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        ref = TypeRef("Dictionary", kind=GENERIC, arguments=[TypeRef("string"), declared(public_class)])
        assert resolver.resolve_reference(direct_reference, _attr("ByName", ref)) is public_class

    def test_nested_generic_is_not_unwrapped(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        inner = TypeRef("List", kind=GENERIC, arguments=[declared(public_class)])
        ref = TypeRef("List", kind=GENERIC, arguments=[inner])
        assert resolver.resolve_reference(direct_reference, _attr("Pages", ref)) is None

    def test_collection_of_primitives(self, public_class):
        resolver = ReferenceResolver([public_class])
        ref = TypeRef("List", kind=GENERIC, arguments=[TypeRef("int")])
        assert resolver.resolve_reference(public_class, _attr("Count", ref)) is None

    def test_function_wrapper_never_matches(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        ref = TypeRef("Func", kind=FUNCTION, arguments=[declared(public_class)])
        assert resolver.resolve_reference(direct_reference, _attr("Factory", ref)) is None

    def test_function_wrapper_by_configured_name(self, public_class, direct_reference):
        resolver = ReferenceResolver([public_class, direct_reference])
        ref = TypeRef("Predicate", kind=GENERIC, arguments=[declared(public_class)])
        assert resolver.resolve_reference(direct_reference, _attr("Filter", ref)) is None

    def test_user_type_named_like_wrapper_still_matches(self, direct_reference):
        action = TypeDescriptor("Action")
        resolver = ReferenceResolver([action, direct_reference])
        assert resolver.resolve_reference(direct_reference, _attr("LastAction", declared(action))) is action

    def test_nested_target_never_matches(self, nesting_pair):
        nesting, nested = nesting_pair
        resolver = ReferenceResolver([nesting])
        attr = _attr("NestedProperty", declared(nested))
        assert resolver.resolve_reference(nesting, attr) is None

    def test_self_reference_is_returned(self, public_class):
        resolver = ReferenceResolver([public_class])
        assert resolver.resolve_reference(public_class, _attr("Parent", declared(public_class))) is public_class


class TestIndirectReferences:

    def test_guid_with_id_suffix(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        attr = _attr("PublicClassId", TypeRef("Guid"))
        assert resolver.resolve(indirect_reference, attr) == (public_class, INDIRECT)

    def test_non_identifier_type_ignored(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassId", TypeRef("int"))) is None

    def test_suffix_is_case_sensitive(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassID", TypeRef("Guid"))) is None

    def test_stem_must_match_exactly(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassesId", TypeRef("Guid"))) is None

    def test_ineligible_target_ignored(self, internal_class, indirect_reference):
        resolver = ReferenceResolver([indirect_reference])
        assert resolver.resolve_reference(indirect_reference, _attr("InternalClassId", TypeRef("Guid"))) is None

    def test_uuid_is_an_identifier_type(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassId", TypeRef("UUID"))) is public_class

    def test_generic_identifier_ignored(self, public_class, indirect_reference):
        resolver = ReferenceResolver([public_class, indirect_reference])
        ref = TypeRef("Nullable", kind=GENERIC, arguments=[TypeRef("Guid")])
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassId", ref)) is None

    def test_snake_case_keys_need_opt_in(self, public_class, indirect_reference):
        attr = _attr("public_class_id", TypeRef("UUID"))
        assert ReferenceResolver([public_class]).resolve_reference(indirect_reference, attr) is None
        resolver = ReferenceResolver([public_class], ReflectionSettings(snake_case_keys=True))
        assert resolver.resolve_reference(indirect_reference, attr) is public_class

    def test_custom_identifier_types(self, public_class, indirect_reference):
        settings = ReflectionSettings(identifier_types=["long"])
        resolver = ReferenceResolver([public_class], settings)
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassId", TypeRef("long"))) is public_class
        assert resolver.resolve_reference(indirect_reference, _attr("PublicClassId", TypeRef("Guid"))) is None


class TestMatchForeignKeyName:

    def test_bare_suffix_has_no_stem(self):
        names = {"": [TypeDescriptor("")]}
        assert match_foreign_key_name("Id", names) is None

    def test_ambiguous_stem_never_matches(self):
        names = {"Order": [TypeDescriptor("Order", namespace="a"), TypeDescriptor("Order", namespace="b")]}
        assert match_foreign_key_name("OrderId", names) is None

    def test_unique_stem(self):
        order = TypeDescriptor("Order")
        assert match_foreign_key_name("OrderId", {"Order": [order]}) is order

    def test_snake_to_pascal(self):
        assert snake_to_pascal("order_line") == "OrderLine"
        assert snake_to_pascal("customer") == "Customer"
