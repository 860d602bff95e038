import os
import logging

logger: logging.Logger = logging.getLogger("ll1")
logger.addHandler(logging.StreamHandler())
# Set to highest level, since we have some warnings amongst the code
# By default, we should not output any log messages
logger.setLevel(logging.CRITICAL)


def classify(seq, key=None, value=None):
    d = {}
    for item in seq:
        k = key(item) if (key is not None) else item
        v = value(item) if (value is not None) else item
        if k in d:
            d[k].append(v)
        else:
            d[k] = [v]
    return d


def dedup_list(l):
    """Given a list (l) will removing duplicates from the list,
       preserving the original order of the list. Assumes that
       the list entries are hashable."""
    dedup = set()
    return [x for x in l if not (x in dedup or dedup.add(x))]


def _serialize(value):
    if isinstance(value, Serialize):
        return value.serialize()
    elif isinstance(value, (list, tuple)):
        return [_serialize(elem) for elem in value]
    elif isinstance(value, (set, frozenset)):
        return sorted(value)
    elif isinstance(value, dict):
        return {key: _serialize(elem) for key, elem in value.items()}
    return value


def _deserialize(data, namespace):
    if isinstance(data, dict):
        if '__type__' in data:  # Object
            class_ = namespace[data['__type__']]
            return class_.deserialize(data)
        return {key: _deserialize(value, namespace) for key, value in data.items()}
    elif isinstance(data, list):
        return [_deserialize(value, namespace) for value in data]
    return data


class Serialize:
    """Safe-ish serialization interface that doesn't rely on Pickle

    Attributes:
        __serialize_fields__ (List[str]): Fields (aka attributes) to serialize.
        __serialize_namespace__ (list): List of classes that deserialization is allowed to instantiate.
                                        Should include all field types that aren't builtin types.
    """

    def serialize(self):
        fields = getattr(self, '__serialize_fields__')
        res = {f: _serialize(getattr(self, f)) for f in fields}
        res['__type__'] = type(self).__name__
        if hasattr(self, '_serialize'):
            self._serialize(res)
        return res

    @classmethod
    def deserialize(cls, data):
        namespace = getattr(cls, '__serialize_namespace__', [])
        namespace = {c.__name__: c for c in namespace}

        fields = getattr(cls, '__serialize_fields__')

        inst = cls.__new__(cls)
        for f in fields:
            try:
                setattr(inst, f, _deserialize(data[f], namespace))
            except KeyError as e:
                raise KeyError("Cannot find key for class", cls, e)

        if hasattr(inst, '_deserialize'):
            inst._deserialize()

        return inst


try:
    import atomicwrites
except ImportError:
    atomicwrites = None  # type: ignore[assignment]

class FS:
    exists = staticmethod(os.path.exists)

    @staticmethod
    def open(name, mode="r", **kwargs):
        if atomicwrites and "w" in mode:
            return atomicwrites.atomic_write(name, mode=mode, overwrite=True, **kwargs)
        else:
            return open(name, mode, **kwargs)
