"""
Reading input layers from disk and writing the resulting topology.

Shapefiles are read with pyshp, either directly or as a member of a zipfile
(e.g. 'data/countries.zip/countries.shp'). GeoJSON files are read with json.
Topologies are written as json text, or inside a zipfile if the output path
ends with '.zip'.
"""

import os
import json
import warnings
from contextlib import contextmanager
from zipfile import ZipFile, ZIP_DEFLATED

import shapefile as pyshp

from .errors import InputError

@contextmanager
def get_reader(path, encoding='utf8'):
    """Opens a pyshp reader, closing it (and the zipfile it was read from) on exit."""
    if '.zip' in path:
        # path to a shapefile within a zipfile
        zpath,shapefile = path[:path.find('.zip')+4], path[path.find('.zip')+4+1:]
        with ZipFile(zpath, 'r') as archive:
            names = archive.namelist()
            if not shapefile:
                # use the only shapefile in the archive
                shapefiles = [name for name in names if name.endswith('.shp')]
                if len(shapefiles) != 1:
                    raise InputError('Zipfile must contain exactly one shapefile, found: {}'.format(shapefiles))
                shapefile = shapefiles[0]
            shapefile = os.path.splitext(shapefile)[0] # root shapefile name
            missing = [shapefile+ext for ext in ('.shp','.shx','.dbf') if shapefile+ext not in names]
            if missing:
                raise InputError('Zipfile {} is missing: {}'.format(zpath, missing))
            # read file (pyshp), pyshp leaves streams it did not open to the caller
            with archive.open(shapefile+'.shp') as shp, \
                 archive.open(shapefile+'.shx') as shx, \
                 archive.open(shapefile+'.dbf') as dbf:
                with pyshp.Reader(shp=shp, shx=shx, dbf=dbf, encoding=encoding) as reader:
                    yield reader
    else:
        with pyshp.Reader(path, encoding=encoding) as reader:
            yield reader

def read_shapefile(path, encoding='utf8'):
    """Reads a shapefile as a GeoJSON FeatureCollection, skipping null geometries."""
    feats = []
    with get_reader(path, encoding) as reader:
        for shaperec in reader.iterShapeRecords():
            shape, rec = shaperec.shape, shaperec.record
            if shape.shapeType == pyshp.NULL:
                warnings.warn('Skipping record {} in {}: null geometry'.format(rec.oid, path))
                continue
            geoj = shape.__geo_interface__
            if not geoj['coordinates']:
                # skip over geometries with zero coords
                warnings.warn('Skipping record {} in {}: geometry has no coordinates'.format(rec.oid, path))
                continue
            feat = {'type':'Feature',
                    'id':rec.oid,
                    'properties':rec.as_dict(date_strings=True),
                    'geometry':geoj}
            feats.append(feat)
    return {'type':'FeatureCollection', 'features':feats}

def read_geojson(path, encoding='utf8'):
    with open(path, encoding=encoding) as fobj:
        return json.load(fobj)

def read_object(path, encoding='utf8'):
    """Reads a single input layer, choosing the reader from the file extension."""
    lower = path.lower()
    if lower.endswith('.shp') or '.zip' in lower:
        return read_shapefile(path, encoding)
    elif lower.endswith(('.json', '.geojson')):
        return read_geojson(path, encoding)
    else:
        raise InputError('Unsupported input file: {}'.format(path))

def read_objects(inputs, input_dir='', encoding='utf8'):
    """
    Given a list of {'name':..., 'path':...} dicts, returns a dict of
    name -> GeoJSON object in the same order. Paths are relative to input_dir.
    A missing name defaults to the file name without extension.
    """
    objects = {}
    for item in inputs:
        path = os.path.join(input_dir, item['path'])
        name = item.get('name') or os.path.splitext(os.path.basename(item['path']))[0]
        if name in objects:
            raise InputError('Duplicate layer name: {}'.format(name))
        objects[name] = read_object(path, item.get('encoding', encoding))
    return objects

def write_topology(topo, path):
    """
    Writes the topology as json, zipped if path ends with '.zip'.
    Existing files are only rewritten if their content has changed.
    Returns True if the file was written.
    """
    topodata = json.dumps(topo)
    if path.endswith('.zip'):
        filename = os.path.basename(path)[:-4]
        # check if has changed
        if os.path.lexists(path):
            with ZipFile(path, mode='r') as archive:
                if filename in archive.namelist():
                    with archive.open(filename, mode='r') as fobj:
                        # python writes json strings as unicode escaped ascii
                        if fobj.read().decode('ascii') == topodata:
                            return False
        with ZipFile(path, mode='w', compression=ZIP_DEFLATED) as archive:
            archive.writestr(filename, topodata)
    else:
        if os.path.lexists(path):
            with open(path, encoding='utf8') as fobj:
                if fobj.read() == topodata:
                    return False
        with open(path, 'w', encoding='utf8') as fobj:
            fobj.write(topodata)
    return True
