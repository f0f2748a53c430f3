from sgas4py.chain.tx import TX
import msgpack


def default_hook(obj):
    if isinstance(obj, TX):
        return {
            '_sgas4py_class_': 'TX',
            'binary': obj.to_array(),
        }
    return obj


def object_hook(dct):
    if isinstance(dct, dict) and '_sgas4py_class_' in dct:
        if dct['_sgas4py_class_'] == 'TX':
            return TX.from_binary(binary=dct['binary'])
        else:
            raise Exception('Not found class name "{}"'.format(dct['_sgas4py_class_']))
    else:
        return dct


def dump(obj, fp, **kwargs):
    msgpack.pack(obj, fp, use_bin_type=True, default=default_hook, **kwargs)


def dumps(obj, **kwargs):
    return msgpack.packb(obj, use_bin_type=True, default=default_hook, **kwargs)


def load(fp):
    return msgpack.unpack(fp, object_hook=object_hook, raw=False, strict_map_key=False)


def loads(b):
    return msgpack.unpackb(b, object_hook=object_hook, raw=False, strict_map_key=False)


__all__ = [
    "default_hook",
    "object_hook",
    "dump",
    "dumps",
    "load",
    "loads",
]
