"""Export route — user-triggered download of the standalone simulator bundle.

Invariants:
    - Independent of any session: exporting never changes session state
    - Failures surface as ExportError → structured 500 with a user-facing message
"""


from fastapi import APIRouter
from fastapi.responses import Response

from decision_sim.services.export_bundle import (
    BUNDLE_FILENAME,
    BUNDLE_MEDIA_TYPE,
    build_export_bundle,
)

router = APIRouter(prefix="/api/v1/export", tags=["export"])


@router.get("")
def download_bundle():
    """Build the bundle and hand it to the browser as an attachment.

    Sync handler: file reads run in the threadpool, off the event loop.
    """
    data = build_export_bundle()
    return Response(
        content=data,
        media_type=BUNDLE_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{BUNDLE_FILENAME}"',
        },
    )
