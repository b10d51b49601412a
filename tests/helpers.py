"""Shared builders for service fixtures."""


def service(name, actions=None, openapi=None, version=None):
    schema = {"name": name, "settings": {}, "actions": actions or {}}
    if openapi is not None:
        schema["settings"]["openapi"] = openapi
    if version is not None:
        schema["version"] = version
    return schema


def entry(path, security=None, **operation):
    element = {"$path": path}
    if security is not None:
        element["security"] = security
    element.update(operation)
    return element
