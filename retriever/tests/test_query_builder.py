# Path: retriever/tests/test_query_builder.py
"""
Query Builder Tests

Query assembly for fetch and export modes: wildcards, explicit names,
foldered types, standard objects and exclusions.
"""

import asyncio

import pytest

from retriever.core.errors import RemoteServiceError, UsageError
from retriever.engine.constants import WILDCARD_TYPES
from retriever.engine.query_builder import QueryBuilder, split_names, validate_request
from retriever.engine.result import QueryElement
from retriever.tests.fixtures import FakeMetadataService


def build(service, **kwargs):
    return asyncio.run(QueryBuilder(service).build(**kwargs))


def test_split_names_flattens_commas_and_repeats():
    assert split_names(['ApexClass,ApexPage', ' Flow ', '', 'a,,b']) == [
        'ApexClass', 'ApexPage', 'Flow', 'a', 'b'
    ]
    assert split_names(None) == []


def test_single_type_gets_wildcard():
    service = FakeMetadataService()
    query = build(service, types=['ApexClass'])
    assert query == [QueryElement(types=['ApexClass'], members=['*'])]
    assert service.calls == []


def test_names_are_sent_verbatim_with_types():
    query = build(FakeMetadataService(), types=['CustomObject'], names=['Book__c', 'Author__c'])
    assert query == [QueryElement(types=['CustomObject'], members=['Book__c', 'Author__c'])]


def test_multiple_types_with_one_name_allowed():
    query = build(FakeMetadataService(), types=['ApexClass', 'ApexPage'], names=['Foo'])
    assert query == [QueryElement(types=['ApexClass', 'ApexPage'], members=['Foo'])]


def test_multiple_types_and_names_rejected_before_remote_calls():
    service = FakeMetadataService()
    with pytest.raises(UsageError, match="more than one metadata type"):
        build(service, types=['ApexClass', 'ApexPage'], names=['Foo', 'Bar'])
    assert service.calls == []


def test_nothing_requested_rejected():
    with pytest.raises(UsageError, match="must specify object type"):
        validate_request([], [])


def test_package_xml_alone_is_valid(tmp_path):
    validate_request([], [], tmp_path / 'package.xml')


def test_each_type_gets_own_element():
    query = build(FakeMetadataService(), types=['ApexClass', 'ApexTrigger'])
    assert [element.types for element in query] == [['ApexClass'], ['ApexTrigger']]


def test_custom_object_lists_standard_objects():
    service = FakeMetadataService(sobjects=[
        {'name': 'Account', 'custom': False},
        {'name': 'Book__c', 'custom': True},
        {'name': 'Account__History', 'custom': False},
        {'name': 'Contact__Share', 'custom': False},
        {'name': 'Lead__Tag', 'custom': False},
        {'name': 'Contact', 'custom': False},
    ])
    query = build(service, types=['CustomObject'])
    assert query == [QueryElement(types=['CustomObject'], members=['*', 'Account', 'Contact'])]


def test_custom_object_listing_failure_is_fatal():
    service = FakeMetadataService(failures={'list_sobjects': RemoteServiceError('boom')})
    with pytest.raises(RemoteServiceError, match="Could not list objects: boom"):
        build(service, types=['CustomObject'])


def test_email_translated_to_email_template():
    service = FakeMetadataService(
        folders={'Email': ['Sales', 'Support']},
        folder_members={'EmailTemplate': ['Sales/Welcome', 'Support/Reset']},
    )
    query = build(service, types=['Email'])
    assert query == [
        QueryElement(types=['EmailTemplate'], members=['Sales/Welcome', 'Support/Reset'])
    ]
    assert service.called('get_metadata_in_folders') == [
        ('EmailTemplate', ['Sales', 'Support'])
    ]


def test_email_with_names_uses_metadata_type():
    query = build(FakeMetadataService(), types=['Email'], names=['Sales/Welcome'])
    assert query == [QueryElement(types=['EmailTemplate'], members=['Sales/Welcome'])]


@pytest.mark.parametrize('types', [['Report', 'Report'], ['Email', 'EmailTemplate']])
def test_repeated_foldered_types_resolved_once(types):
    service = FakeMetadataService(
        folders={'Report': ['Q1'], 'Email': ['Sales']},
        folder_members={'Report': ['Q1/Revenue'], 'EmailTemplate': ['Sales/Welcome']},
    )
    query = build(service, types=types)

    assert len(query) == 1
    assert len(service.called('get_metadata_in_folders')) == 1


def test_repeated_plain_types_kept_in_order():
    query = build(FakeMetadataService(), types=['ApexPage', 'ApexClass', 'ApexPage'])
    assert [element.types for element in query] == [['ApexPage'], ['ApexClass']]


def test_folder_directory_listed_once_for_many_foldered_types():
    service = FakeMetadataService(
        folders={'Report': ['Q1'], 'Dashboard': ['Ops']},
        folder_members={'Report': ['Q1/Revenue'], 'Dashboard': ['Ops/Main']},
    )
    query = build(service, types=['Report', 'Dashboard'])
    assert [element.members for element in query] == [['Q1/Revenue'], ['Ops/Main']]
    assert len(service.called('get_all_folders')) == 1


def test_export_uses_catalog_and_folder_types():
    service = FakeMetadataService(
        sobjects=[{'name': 'Account', 'custom': False}],
        folders={'Email': ['Sales'], 'Report': ['Q1']},
        folder_members={'EmailTemplate': ['Sales/Welcome'], 'Report': ['Q1/Revenue']},
    )
    query = build(service, names=['ignored'], export_all=True)
    types = [element.types[0] for element in query]

    assert types[:len(WILDCARD_TYPES)] == list(WILDCARD_TYPES)
    assert types[len(WILDCARD_TYPES):] == ['EmailTemplate', 'Report']
    custom_object = query[types.index('CustomObject')]
    assert custom_object.members == ['*', 'Account']


def test_export_exclusions():
    service = FakeMetadataService(
        folders={'Email': ['Sales'], 'Document': ['Shared']},
        folder_members={'EmailTemplate': ['Sales/Welcome'], 'Document': ['Shared/Logo']},
    )
    query = build(
        service,
        excludes=['StaticResource,Email', 'Document', 'CustomObject'],
        export_all=True,
    )
    types = {element.types[0] for element in query}

    assert 'StaticResource' not in types
    assert 'EmailTemplate' not in types
    assert 'Document' not in types
    assert 'CustomObject' not in types
    assert 'ApexClass' in types
    assert service.called('list_sobjects') == []
    assert service.called('get_metadata_in_folders') == []


def test_export_folder_failure_is_fatal():
    service = FakeMetadataService(failures={'get_all_folders': RemoteServiceError('down')})
    with pytest.raises(RemoteServiceError, match="Could not get folders: down"):
        build(service, export_all=True)
