from domain_model_generator.models.schema import DECLARED, TypeDescriptor, TypeRef


def declared(t: TypeDescriptor) -> TypeRef:
    return TypeRef(name=t.name, kind=DECLARED, declared=t)


def by_name(types, name):
    return next(t for t in types if t.name == name)
