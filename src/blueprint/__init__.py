from .errors import BlueprintError, MissingArgument, TypeMismatch
from .factory import Binding, BlueprintFactory, FunctionFactory, define_factory, from_template
from .fields import Field, FieldTable, all_fields, declared_fields, is_assignable
from .merge import merge, merge_instance, merge_mapping
from .types import FieldMap, Produce, Setter
from .variants import Variants, VariantList, VariantMap, VariantMapList

__all__ = [
    "all_fields",
    "declared_fields",
    "define_factory",
    "from_template",
    "is_assignable",
    "merge_instance",
    "merge_mapping",
    "merge",
    "Binding",
    "BlueprintError",
    "BlueprintFactory",
    "Field",
    "FieldMap",
    "FieldTable",
    "FunctionFactory",
    "MissingArgument",
    "Produce",
    "Setter",
    "TypeMismatch",
    "VariantList",
    "VariantMap",
    "VariantMapList",
    "Variants",
]
