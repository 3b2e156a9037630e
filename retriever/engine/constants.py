# Path: retriever/engine/constants.py
"""
Engine Constants

Static lookup tables for query building, bundle decomposition and the
HTTP transport. Kept as data so the engine logic stays declarative.
"""

# ================================================================
# WILDCARD CATALOG (export mode)
# ================================================================

# Types retrievable with a "*" member pattern. Foldered types are not
# listed here; they are discovered through the folder directory.
WILDCARD_TYPES: tuple = (
    'AccountSettings',
    'ActivitiesSettings',
    'AddressSettings',
    'AnalyticSnapshot',
    'ApexClass',
    'ApexComponent',
    'ApexPage',
    'ApexTrigger',
    'ApprovalProcess',
    'AssignmentRules',
    'Audience',
    'AuraDefinitionBundle',
    'AuthProvider',
    'AutoResponseRules',
    'BusinessHoursSettings',
    'BusinessProcess',
    'CallCenter',
    'CaseSettings',
    'ChatterAnswersSettings',
    'CompanySettings',
    'Community',
    'CompactLayout',
    'ConnectedApp',
    'ContentAsset',
    'ContractSettings',
    'CustomApplication',
    'CustomApplicationComponent',
    'CustomField',
    'CustomLabels',
    'CustomMetadata',
    'CustomObject',
    'CustomObjectTranslation',
    'CustomPageWebLink',
    'CustomPermission',
    'CustomSite',
    'CustomTab',
    'DataCategoryGroup',
    'DuplicateRule',
    'EntitlementProcess',
    'EntitlementSettings',
    'EntitlementTemplate',
    'ExternalDataSource',
    'FieldSet',
    'FlexiPage',
    'Flow',
    'FlowDefinition',
    'Folder',
    'ForecastingSettings',
    'Group',
    'HomePageComponent',
    'HomePageLayout',
    'IdeasSettings',
    'KnowledgeSettings',
    'Layout',
    'Letterhead',
    'ListView',
    'LiveAgentSettings',
    'LiveChatAgentConfig',
    'LiveChatButton',
    'LiveChatDeployment',
    'MatchingRules',
    'MilestoneType',
    'MobileSettings',
    'NamedFilter',
    'Network',
    'OpportunitySettings',
    'PermissionSet',
    'Portal',
    'PostTemplate',
    'ProductSettings',
    'Profile',
    'ProfileSessionSetting',
    'Queue',
    'QuickAction',
    'QuoteSettings',
    'RecordType',
    'RemoteSiteSetting',
    'ReportType',
    'Role',
    'SamlSsoConfig',
    'Scontrol',
    'SecuritySettings',
    'SharingReason',
    'SharingRules',
    'Skill',
    'StaticResource',
    'Territory',
    'Translations',
    'ValidationRule',
    'Workflow',
)

WILDCARD_MEMBER: str = '*'

# ================================================================
# CUSTOM OBJECT MEMBERS
# ================================================================

CUSTOM_OBJECT_TYPE: str = 'CustomObject'

# Standard objects with these suffixes are platform-generated companions
STANDARD_OBJECT_EXCLUDED_SUFFIXES: tuple = ('__Tag', '__History', '__Share')

# ================================================================
# FOLDERED TYPES
# ================================================================

# Metadata type name -> folder API type name. The two APIs disagree on
# email templates only.
FOLDER_TYPE_BY_METADATA_TYPE: dict = {
    'EmailTemplate': 'Email',
    'Dashboard': 'Dashboard',
    'Report': 'Report',
    'Document': 'Document',
}

METADATA_TYPE_BY_FOLDER_TYPE: dict = {
    folder_type: metadata_type
    for metadata_type, folder_type in FOLDER_TYPE_BY_METADATA_TYPE.items()
}

# ================================================================
# FETCH MODES
# ================================================================

# Pseudo-types selecting an alternate retrieval path (matched case-insensitively)
AURA_FETCH_TYPE: str = 'aura'
PACKAGE_FETCH_TYPE: str = 'package'
STATIC_RESOURCE_TYPE: str = 'staticresource'

# ================================================================
# AURA BUNDLE DECOMPOSITION
# ================================================================

# DefType -> file name suffix appended to the bundle developer name.
# {title} is the DefType in title case (STYLE -> Style).
DEF_TYPE_SUFFIXES: dict = {
    'COMPONENT': '.cmp',
    'APPLICATION': '.app',
    'EVENT': '.evt',
    'STYLE': '{title}.css',
    'DOCUMENTATION': '.auradoc',
    'SVG': '.svg',
    'DESIGN': '.design',
    'INTERFACE': '.intf',
}
DEFAULT_DEF_TYPE_SUFFIX: str = '{title}.js'

# Platform record field names
FIELD_ID: str = 'Id'
FIELD_DEVELOPER_NAME: str = 'DeveloperName'
FIELD_BUNDLE_ID: str = 'AuraDefinitionBundleId'
FIELD_DEF_TYPE: str = 'DefType'
FIELD_SOURCE: str = 'Source'

# ================================================================
# HTTP TRANSPORT
# ================================================================

ENDPOINT_SOBJECTS: str = '/sobjects'
ENDPOINT_FOLDERS: str = '/folders'
ENDPOINT_FOLDER_MEMBERS: str = '/folders/members'
ENDPOINT_RETRIEVE: str = '/retrieve'
ENDPOINT_RETRIEVE_PACKAGE_XML: str = '/retrieve/package-xml'
ENDPOINT_RETRIEVE_PACKAGE: str = '/retrieve/package'
ENDPOINT_AURA_BUNDLES: str = '/aura/bundles'

HEADER_AUTHORIZATION: str = 'Authorization'
HEADER_ACCEPT: str = 'Accept'
DEFAULT_ACCEPT_HEADER: str = 'application/json'

# Payload keys
PAYLOAD_ZIP_FILE: str = 'zipFile'
PAYLOAD_PROBLEMS: str = 'problems'
PAYLOAD_BUNDLES: str = 'bundles'
PAYLOAD_DEFINITIONS: str = 'definitions'

# Top-level folder the service wraps unpackaged retrievals in
UNPACKAGED_PREFIX: str = 'unpackaged/'


__all__ = [
    'WILDCARD_TYPES',
    'WILDCARD_MEMBER',
    'CUSTOM_OBJECT_TYPE',
    'STANDARD_OBJECT_EXCLUDED_SUFFIXES',
    'FOLDER_TYPE_BY_METADATA_TYPE',
    'METADATA_TYPE_BY_FOLDER_TYPE',
    'AURA_FETCH_TYPE',
    'PACKAGE_FETCH_TYPE',
    'STATIC_RESOURCE_TYPE',
    'DEF_TYPE_SUFFIXES',
    'DEFAULT_DEF_TYPE_SUFFIX',
    'FIELD_ID',
    'FIELD_DEVELOPER_NAME',
    'FIELD_BUNDLE_ID',
    'FIELD_DEF_TYPE',
    'FIELD_SOURCE',
    'ENDPOINT_SOBJECTS',
    'ENDPOINT_FOLDERS',
    'ENDPOINT_FOLDER_MEMBERS',
    'ENDPOINT_RETRIEVE',
    'ENDPOINT_RETRIEVE_PACKAGE_XML',
    'ENDPOINT_RETRIEVE_PACKAGE',
    'ENDPOINT_AURA_BUNDLES',
    'HEADER_AUTHORIZATION',
    'HEADER_ACCEPT',
    'DEFAULT_ACCEPT_HEADER',
    'PAYLOAD_ZIP_FILE',
    'PAYLOAD_PROBLEMS',
    'PAYLOAD_BUNDLES',
    'PAYLOAD_DEFINITIONS',
    'UNPACKAGED_PREFIX',
]
