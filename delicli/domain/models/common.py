"""Defines common Value Objects used across the client.

These objects represent simple values like endpoint paths, request URLs
and the parameter mappings handed to the URL builders.
"""

from typing import Any, Dict, List, Mapping, NewType, Sequence, Union

# === Request Context ===

# Using NewType for semantic clarity, although they are strings at runtime.
EndpointPath = NewType("EndpointPath", str)    # e.g. 'posts/update', relative to the API base
RequestUrl = NewType("RequestUrl", str)        # Fully built URL, query string included
ResponseBody = NewType("ResponseBody", str)    # Raw body returned by the remote service

# A single parameter value as accepted by the query builder.
ParamValue = Union[str, bool, int, Sequence[str], None]
Params = Mapping[str, ParamValue]

# === Parsed Response Context ===

# One XML element flattened to its attributes. The 'tag' attribute may be a list.
ParsedItem = Dict[str, Union[str, List[str]]]

# Result Envelope: always carries 'success' and 'url'.
Envelope = Dict[str, Any]

# === Endpoints ===

POSTS_UPDATE = EndpointPath("posts/update")
POSTS_ADD = EndpointPath("posts/add")
POSTS_DELETE = EndpointPath("posts/delete")
POSTS_GET = EndpointPath("posts/get")
POSTS_RECENT = EndpointPath("posts/recent")
POSTS_DATES = EndpointPath("posts/dates")
POSTS_ALL = EndpointPath("posts/all")
POSTS_ALL_HASHES = EndpointPath("posts/all?hashes")
POSTS_SUGGEST = EndpointPath("posts/suggest")
TAGS_GET = EndpointPath("tags/get")
TAGS_DELETE = EndpointPath("tags/delete")
TAGS_RENAME = EndpointPath("tags/rename")
TAGS_BUNDLES_ALL = EndpointPath("tags/bundles/all")
TAGS_BUNDLES_SET = EndpointPath("tags/bundles/set")
TAGS_BUNDLES_DELETE = EndpointPath("tags/bundles/delete")
