# Path: retriever/tests/test_resource_expander.py
"""
Resource Expander Tests

Descriptor parsing, scheduling, and safe expansion of zipped resources.
"""

import zipfile

import pytest

from retriever.core.errors import ArchiveError
from retriever.engine.extraction import (
    ResourceExpander,
    is_resource_descriptor,
    parse_resource_descriptor,
)
from retriever.tests.fixtures import JS_RESOURCE_META, ZIP_RESOURCE_META, make_zip


def write_resource(root, name, archive: bytes, meta: bytes = ZIP_RESOURCE_META):
    resources = root / 'staticresources'
    resources.mkdir(parents=True, exist_ok=True)
    (resources / f'{name}.resource').write_bytes(archive)
    descriptor = resources / f'{name}.resource-meta.xml'
    descriptor.write_bytes(meta)
    return descriptor


def test_descriptor_detection():
    assert is_resource_descriptor('staticresources/lib.resource-meta.xml')
    assert not is_resource_descriptor('staticresources/lib.resource')


def test_parse_descriptor():
    descriptor = parse_resource_descriptor(ZIP_RESOURCE_META)
    assert descriptor.content_type == 'application/zip'
    assert descriptor.cache_control == 'Private'


def test_parse_malformed_descriptor():
    assert parse_resource_descriptor(b'<StaticResource><contentType>') is None


def test_only_zip_descriptors_scheduled(tmp_path):
    expander = ResourceExpander()
    zipped = write_resource(tmp_path, 'lib', make_zip({'a.js': b'a'}))
    script = write_resource(tmp_path, 'app', b'alert(1)', JS_RESOURCE_META)

    assert expander.inspect('staticresources/lib.resource-meta.xml', zipped, ZIP_RESOURCE_META)
    assert not expander.inspect('staticresources/app.resource-meta.xml', script, JS_RESOURCE_META)
    assert not expander.inspect('staticresources/lib.resource', tmp_path / 'x', b'PK')
    assert expander.pending == {'lib': tmp_path / 'staticresources' / 'lib.resource'}


def test_expand_pending_mirrors_archive(tmp_path):
    archive = make_zip(
        {
            'js/app.js': b'console.log(1)',
            'css/site.css': b'body {}',
            '__MACOSX/js/._app.js': b'junk',
        },
        directories=['img'],
    )
    descriptor = write_resource(tmp_path, 'lib', archive)

    expander = ResourceExpander()
    expander.inspect('staticresources/lib.resource-meta.xml', descriptor, ZIP_RESOURCE_META)
    results = expander.expand_pending()

    target = tmp_path / 'staticresources' / 'lib'
    assert (target / 'js' / 'app.js').read_bytes() == b'console.log(1)'
    assert (target / 'css' / 'site.css').read_bytes() == b'body {}'
    assert (target / 'img').is_dir()
    assert not (target / '__MACOSX').exists()

    assert len(results) == 1
    assert results[0].files_extracted == 2
    assert results[0].directories_created == 1
    assert results[0].skipped_reserved == 1
    assert results[0].failed_entries == []
    assert expander.pending == {}


def test_traversal_entries_skipped(tmp_path):
    archive_path = tmp_path / 'evil.resource'
    archive_path.write_bytes(make_zip({'../escaped.txt': b'x', 'ok.txt': b'fine'}))

    result = ResourceExpander().expand(archive_path, tmp_path / 'evil')

    assert not (tmp_path / 'escaped.txt').exists()
    assert (tmp_path / 'evil' / 'ok.txt').read_bytes() == b'fine'
    assert result.failed_entries == ['../escaped.txt']


def test_depth_limit(tmp_path):
    archive_path = tmp_path / 'deep.resource'
    archive_path.write_bytes(make_zip({'a/b/c/d.txt': b'x', 'top.txt': b'y'}))

    result = ResourceExpander(max_depth=2).expand(archive_path, tmp_path / 'deep')

    assert result.failed_entries == ['a/b/c/d.txt']
    assert result.files_extracted == 1


def test_size_limit(tmp_path):
    archive_path = tmp_path / 'big.resource'
    archive_path.write_bytes(make_zip({'big.bin': b'0' * 1024}))

    with pytest.raises(ArchiveError, match="too large"):
        ResourceExpander(max_archive_size=100).expand(archive_path, tmp_path / 'big')


def test_not_a_zip(tmp_path):
    archive_path = tmp_path / 'broken.resource'
    archive_path.write_bytes(b'not a zip at all')

    with pytest.raises(ArchiveError, match="Cannot open archive"):
        ResourceExpander().expand(archive_path, tmp_path / 'broken')


def test_missing_archive(tmp_path):
    with pytest.raises(ArchiveError):
        ResourceExpander().expand(tmp_path / 'gone.resource', tmp_path / 'gone')


def test_corrupt_entry_skipped(tmp_path):
    archive = bytearray(make_zip({'good.txt': b'good', 'bad.txt': b'payload-to-corrupt'}))
    offset = archive.find(b'payload-to-corrupt')
    archive[offset:offset + 7] = b'XXXXXXX'
    archive_path = tmp_path / 'mixed.resource'
    archive_path.write_bytes(bytes(archive))

    result = ResourceExpander().expand(archive_path, tmp_path / 'mixed')

    assert (tmp_path / 'mixed' / 'good.txt').read_bytes() == b'good'
    assert result.failed_entries == ['bad.txt']
    assert zipfile.is_zipfile(archive_path)
