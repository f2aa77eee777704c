"""Release sync: classify the trigger, then create a release or move a tag.

- version: tag resolution from CITATION.cff / metadata file / fallback
- events: trigger classification
- create: manual-dispatch path
- retag: release-published path
- dispatch: routing between the two
"""

from zd.release.dispatch import update_github_state
from zd.release.errors import ReleaseError
from zd.release.events import classify_event
from zd.release.model import Payload, ReleasePublishedPayload, WorkflowDispatchPayload
from zd.release.version import FALLBACK_VERSION, resolve_tag

__all__ = [
    "FALLBACK_VERSION",
    "Payload",
    "ReleaseError",
    "ReleasePublishedPayload",
    "WorkflowDispatchPayload",
    "classify_event",
    "resolve_tag",
    "update_github_state",
]
