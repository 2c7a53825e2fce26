"""
Shared module to hold constant values for the library
"""

# Reserved configuration key holding landscaper metadata for a component
METADATA_KEY = "Landscaper"
METADATA_RELEASE_KEY = "Release"
METADATA_CHART_REPOSITORY_KEY = "ChartRepository"
METADATA_RELEASE_VERSION_KEY = "ReleaseVersion"

# Separator between the chart name and chart version in a release reference
CHART_VERSION_DELIM = ":"

# Separator between the repository and chart in a full chart reference
CHART_REF_DELIM = "/"

# Names of the apply phases used when reporting failures
PHASE_CREATE = "create"
PHASE_UPDATE = "update"
PHASE_DELETE = "delete"
PHASE_REFRESH = "refresh"

# Kubernetes secret type used to store component secrets
SECRET_TYPE_OPAQUE = "Opaque"

# Delimiter used for nested dict keys
NESTED_DICT_DELIM = "."
