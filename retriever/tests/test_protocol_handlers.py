# Path: retriever/tests/test_protocol_handlers.py
"""
Protocol Handler Tests

Payload decoding and the HTTP transport, exercised against an
in-process aiohttp server.
"""

import asyncio
import base64

import pytest
from aiohttp import web
from aiohttp import test_utils

from retriever.core.errors import ConfigurationError, RemoteServiceError, UsageError
from retriever.engine.protocol_handlers import (
    HTTPMetadataService,
    parse_bundle_payload,
    parse_retrieve_payload,
    unpack_archive_payload,
)
from retriever.engine.result import QueryElement
from retriever.tests.fixtures import make_zip


def encoded(archive: bytes) -> str:
    return base64.b64encode(archive).decode('ascii')


def test_unpack_strips_unpackaged_prefix():
    archive = make_zip(
        {
            'unpackaged/package.xml': b'<Package/>',
            'unpackaged/classes/Foo.cls': b'class',
            'MyPackage/objects/Book__c.object': b'obj',
        },
        directories=['unpackaged/classes'],
    )
    assert unpack_archive_payload(archive) == {
        'package.xml': b'<Package/>',
        'classes/Foo.cls': b'class',
        'MyPackage/objects/Book__c.object': b'obj',
    }


def test_unpack_rejects_garbage():
    with pytest.raises(RemoteServiceError, match="Invalid retrieve archive"):
        unpack_archive_payload(b'nope')


def test_parse_retrieve_payload():
    archive = make_zip({'unpackaged/package.xml': b'<Package/>'})
    result = parse_retrieve_payload({'zipFile': encoded(archive), 'problems': ['skipped X']})

    assert result.files == {'package.xml': b'<Package/>'}
    assert result.problems == ['skipped X']
    assert result.archive == archive


@pytest.mark.parametrize('payload', [
    None,
    [],
    {'problems': []},
    {'zipFile': '***not base64***'},
])
def test_parse_retrieve_payload_malformed(payload):
    with pytest.raises(RemoteServiceError, match="Malformed retrieve response"):
        parse_retrieve_payload(payload)


def test_parse_bundle_payload():
    bundles, definitions = parse_bundle_payload({
        'bundles': [{'Id': 'b1', 'DeveloperName': 'Card'}],
        'definitions': [{
            'Id': 'd1',
            'AuraDefinitionBundleId': 'b1',
            'DefType': 'COMPONENT',
            'Source': '<aura:component/>',
        }],
    })
    assert bundles[0].developer_name == 'Card'
    assert definitions[0].bundle_id == 'b1'
    assert definitions[0].source == '<aura:component/>'


def test_missing_service_url():
    with pytest.raises(ConfigurationError, match="RETRIEVER_SERVICE_URL"):
        HTTPMetadataService(config={})


def test_headers_include_token():
    service = HTTPMetadataService(config={'service_url': 'http://x/', 'access_token': 'tok'})
    assert service.base_url == 'http://x'
    assert service._build_headers()['Authorization'] == 'Bearer tok'


def run_against(app: web.Application, scenario):
    async def run():
        server = test_utils.TestServer(app)
        await server.start_server()
        service = HTTPMetadataService(config={
            'service_url': str(server.make_url('')),
            'access_token': 'secret',
            'request_timeout': 10,
            'connect_timeout': 5,
        })
        try:
            return await scenario(service)
        finally:
            await service.close()
            await server.close()

    return asyncio.run(run())


def test_http_retrieve_round_trip():
    archive = make_zip({'unpackaged/classes/Foo.cls': b'class'})
    received = {}

    async def handle_retrieve(request):
        received['body'] = await request.json()
        received['auth'] = request.headers.get('Authorization')
        return web.json_response({'zipFile': encoded(archive), 'problems': []})

    app = web.Application()
    app.router.add_post('/retrieve', handle_retrieve)

    result = run_against(
        app,
        lambda service: service.retrieve([QueryElement(types=['ApexClass'], members=['*'])]),
    )

    assert result.files == {'classes/Foo.cls': b'class'}
    assert received['body'] == {'query': [{'types': ['ApexClass'], 'members': ['*']}]}
    assert received['auth'] == 'Bearer secret'


def test_http_folder_calls():
    async def handle_folders(request):
        return web.json_response({'Report': ['Q1']})

    async def handle_members(request):
        body = await request.json()
        return web.json_response([f"{folder}/Revenue" for folder in body['folders']])

    app = web.Application()
    app.router.add_get('/folders', handle_folders)
    app.router.add_post('/folders/members', handle_members)

    async def scenario(service):
        folders = await service.get_all_folders()
        members = await service.get_metadata_in_folders('Report', folders['Report'])
        return folders, members

    folders, members = run_against(app, scenario)
    assert folders == {'Report': ['Q1']}
    assert members == ['Q1/Revenue']


def test_http_error_status():
    async def handle_sobjects(request):
        return web.Response(status=500, text='server exploded')

    app = web.Application()
    app.router.add_get('/sobjects', handle_sobjects)

    with pytest.raises(RemoteServiceError, match="HTTP 500: server exploded"):
        run_against(app, lambda service: service.list_sobjects())


def test_http_invalid_json():
    async def handle_sobjects(request):
        return web.Response(text='<html>')

    app = web.Application()
    app.router.add_get('/sobjects', handle_sobjects)

    with pytest.raises(RemoteServiceError, match="invalid JSON"):
        run_against(app, lambda service: service.list_sobjects())


def test_package_xml_sent_as_text(tmp_path):
    package_xml = tmp_path / 'package.xml'
    package_xml.write_text('<Package><types/></Package>')
    archive = make_zip({'unpackaged/package.xml': b'<Package/>'})
    received = {}

    async def handle(request):
        received.update(await request.json())
        return web.json_response({'zipFile': encoded(archive)})

    app = web.Application()
    app.router.add_post('/retrieve/package-xml', handle)

    run_against(app, lambda service: service.retrieve_by_package_xml(package_xml))
    assert received == {'packageXml': '<Package><types/></Package>'}


def test_missing_package_xml_file(tmp_path):
    service = HTTPMetadataService(config={'service_url': 'http://localhost:1'})
    with pytest.raises(UsageError, match="Cannot read package xml"):
        asyncio.run(service.retrieve_by_package_xml(tmp_path / 'missing.xml'))


def test_bundle_name_quoted_in_path():
    received = {}

    async def handle_bundle(request):
        received['name'] = request.match_info['name']
        received['raw_path'] = request.raw_path
        return web.json_response({'bundles': [], 'definitions': []})

    app = web.Application()
    app.router.add_get('/aura/bundles/{name}', handle_bundle)

    run_against(app, lambda service: service.get_aura_bundle('Card#1 ?x'))

    assert received['name'] == 'Card#1 ?x'
    assert received['raw_path'] == '/aura/bundles/Card%231%20%3Fx'
