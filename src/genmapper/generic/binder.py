import typing as t
from dataclasses import dataclass, field

from genmapper.errors import BindingError
from genmapper.java.model import InterfaceInfo, JavaType, MethodInfo
from genmapper.table.model import TableInfo


@dataclass
class TableBinding:
    model: t.Optional[JavaType] = None
    example: t.Optional[JavaType] = None
    id_: t.Optional[JavaType] = None
    withheld: list[MethodInfo] = field(default_factory=list)


class MapperBinder:
    """
    Records concrete types of every table and attaches the instantiated generic interface to table mappers.

    A type recorded for a table is never overwritten (first write wins).
    """

    def __init__(self, interface_type: JavaType, *, example_enabled: bool) -> None:
        self.__interface_type = interface_type
        self.__example_enabled = example_enabled
        self.__bindings = dict[str, TableBinding]()

    def get_binding(self, table: TableInfo) -> TableBinding:
        return self.__bindings.setdefault(table.mapper_type.qualname, TableBinding())

    def bind_insert(self, table: TableInfo, model_type: JavaType) -> None:
        binding = self.get_binding(table)
        if binding.model is None:
            binding.model = model_type

    def bind_delete(self, table: TableInfo, id_type: JavaType) -> None:
        binding = self.get_binding(table)
        if binding.id_ is None:
            binding.id_ = id_type

    def bind_count_or_delete(self, table: TableInfo, example_type: JavaType) -> None:
        binding = self.get_binding(table)
        if binding.example is None:
            binding.example = example_type

    def withhold(self, table: TableInfo, method: MethodInfo) -> None:
        """Remember the table method that is inherited from the generic interface instead of being declared."""
        self.get_binding(table).withheld.append(method)

    def release(self, table: TableInfo) -> t.Sequence[MethodInfo]:
        binding = self.get_binding(table)
        withheld, binding.withheld = binding.withheld, []
        return withheld

    def instantiate(self, table: TableInfo) -> JavaType:
        binding = self.get_binding(table)

        type_args = [("model", binding.model)]
        if self.__example_enabled:
            type_args.append(("example", binding.example))
        type_args.append(("id", binding.id_))

        missing = [name for name, type_ in type_args if type_ is None]
        if missing:
            msg = f"no {', '.join(missing)} type recorded for table"
            raise BindingError(msg, table.name)

        return self.__interface_type.parametrize(*(type_ for _, type_ in type_args if type_ is not None))

    def attach(self, table: TableInfo, interface: InterfaceInfo) -> JavaType:
        supertype = self.instantiate(table)
        binding = self.get_binding(table)

        # NOTE: imports concrete model & example types too
        interface.add_super_interface(supertype)

        binding.withheld.clear()

        return supertype
