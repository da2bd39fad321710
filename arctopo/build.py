"""
Builds topologies from meta files.

Each meta file is a json dict describing one output topology:

    {
        "input": [{"name": "countries", "path": "countries.zip"},
                  {"name": "rivers", "path": "rivers.geojson"}],
        "output": "world.topojson.zip",
        "quantization": 1e6,
        "keep_fields": ["NAME", "ISO"],
        "rename_fields": {"NAME": "name"}
    }

The input arg can also be a single path. Paths are relative to the folder of
the meta file. Any folder given on the command line is searched for files
named topologyMetaData.json.

Environment variables ARCTOPO_QUANTIZATION and ARCTOPO_OUTPUT override the
quantization and output args of every meta file, and ARCTOPO_REPLACE controls
whether existing outputs are rebuilt.

Usage: python -m arctopo.build [meta file or folder ...]
"""

import os
import sys
import json
import logging
import traceback

from . import iotools
from .encode import topology

logger = logging.getLogger(__name__)

META_FILENAME = 'topologyMetaData.json'

def env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ('true', '1', 't')

def env_overrides():
    overrides = {}
    if os.getenv('ARCTOPO_QUANTIZATION'):
        overrides['quantization'] = float(os.environ['ARCTOPO_QUANTIZATION'])
    if os.getenv('ARCTOPO_OUTPUT'):
        overrides['output'] = os.environ['ARCTOPO_OUTPUT']
    return overrides

def make_property_filter(keep_fields=None, rename_fields=None):
    """
    Returns a property filter keeping the fields in keep_fields (all fields
    if only rename_fields is given) and renaming those in rename_fields.
    Returns None if neither is given, so no properties are kept.
    """
    if keep_fields is None and not rename_fields:
        return None
    rename_fields = rename_fields or {}
    keep = set(keep_fields) if keep_fields is not None else None

    def property_filter(key):
        if keep is not None and key not in keep:
            return None
        return rename_fields.get(key, key)

    return property_filter

def iter_meta_paths(paths):
    for path in paths:
        if os.path.isdir(path):
            for dirpath,dirnames,filenames in os.walk(path):
                dirnames.sort()
                if META_FILENAME in filenames:
                    yield os.path.join(dirpath, META_FILENAME)
        else:
            yield path

def load_meta(meta_path):
    with open(meta_path, encoding='utf8') as fobj:
        meta = json.load(fobj)
    if not isinstance(meta, dict):
        raise ValueError("meta file '{}' must contain a json dict".format(meta_path))
    meta.update(env_overrides())
    if 'input' not in meta or 'output' not in meta:
        raise ValueError("meta file '{}' requires both an input and an output arg".format(meta_path))
    # nest single inputs
    if isinstance(meta['input'], str):
        meta['input'] = [{'path': meta['input']}]
    elif not isinstance(meta['input'], list):
        raise ValueError("meta file '{}' input arg must be either string or list of dicts".format(meta_path))
    return meta

def build(meta_path, replace=True):
    """Builds the topology described by one meta file. Returns True if the output was written."""
    meta = load_meta(meta_path)
    input_dir = os.path.dirname(meta_path)
    output = os.path.join(input_dir, meta['output'])
    if os.path.lexists(output) and not replace:
        logger.info('output %s already exists and replace = False, skipping', output)
        return False

    logger.info('reading %d input layers', len(meta['input']))
    objects = iotools.read_objects(meta['input'], input_dir, meta.get('encoding', 'utf8'))

    logger.info('creating topology')
    property_filter = make_property_filter(meta.get('keep_fields'), meta.get('rename_fields'))
    topo = topology(objects,
                    quantization=meta.get('quantization'),
                    property_filter=property_filter)
    logger.info('%d arcs, %d objects', len(topo['arcs']), len(topo['objects']))

    written = iotools.write_topology(topo, output)
    if written:
        logger.info('wrote %s', output)
    else:
        logger.info('%s has not changed', output)
    return written

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    if not argv:
        print(__doc__)
        return 2

    replace = env_flag('ARCTOPO_REPLACE', default=True)
    error_count = 0
    for meta_path in iter_meta_paths(argv):
        logger.info('processing %s', meta_path)
        try:
            build(meta_path, replace=replace)
        except Exception:
            error_count += 1
            logging.warning("error building topology for '{}': {}".format(meta_path, traceback.format_exc()))

    if error_count > 0:
        logging.warning('build encountered a total of {} errors'.format(error_count))
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
