"""Nesting endpoints."""

import logging
import math

from fastapi import APIRouter, Query
from fastapi.responses import Response

from fabricnest.application.config import default_pieces
from fabricnest.application.dtos import FabricInput, LayoutOutput, PieceInput
from fabricnest.infrastructure import LayoutDiagramRenderer
from fabricnest.web.dependencies import NestCommandDep
from fabricnest.web.exceptions import NestingFailedError
from fabricnest.web.schemas.requests import (
    FabricSchema,
    NestRequest,
    PieceSchema,
    SpacingSchema,
)
from fabricnest.web.schemas.responses import (
    ErrorResponseSchema,
    FreeRectangleSchema,
    LayoutResponse,
    MetricsSchema,
    PlacementSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nest", tags=["nest"])


def _run(command: NestCommandDep, request: NestRequest) -> LayoutOutput:
    """Run a nesting request, raising NestingFailedError on failure."""
    fabric_input = FabricInput(
        width_cm=request.fabric.width_cm,
        margin_x=request.fabric.margin_x,
        margin_y=request.fabric.margin_y,
        gap_x=request.spacing.gap_x,
        gap_y=request.spacing.gap_y,
    )
    pieces = [
        PieceInput(
            label=piece.label,
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            id=piece.id,
        )
        for piece in request.pieces
    ]

    output = command.execute(fabric_input, pieces)
    if not output.is_valid:
        raise NestingFailedError(output.errors, output.error_kind, output.piece_id)
    return output


def _layout_output_to_schema(output: LayoutOutput) -> LayoutResponse:
    """Convert LayoutOutput to response schema."""
    layout = output.layout
    metrics = output.metrics
    assert layout is not None and metrics is not None

    return LayoutResponse(
        fabric_width_cm=layout.fabric.width_cm,
        printable_width=layout.printable_width,
        total_length_cm=layout.total_length_cm,
        piece_area=layout.piece_area,
        utilization=layout.utilization,
        placements=[
            PlacementSchema(
                piece_unit_id=p.piece_unit_id,
                source_type_id=p.source_type_id,
                label=p.label,
                x=p.x,
                y=p.y,
                width=p.width,
                height=p.height,
            )
            for p in layout.placements
        ],
        metrics=MetricsSchema(
            length_cm=metrics.length_cm,
            length_m=metrics.length_m,
            length_display=metrics.length_display,
            band_count=metrics.band_count,
            piece_count=metrics.piece_count,
            utilization_pct=metrics.utilization_pct,
            waste_pct=metrics.waste_pct,
            fabric_usage_pct=metrics.fabric_usage_pct,
        ),
        free_rectangles=[
            FreeRectangleSchema(
                x=r.x,
                y=r.y,
                width=r.width,
                height=None if math.isinf(r.height) else r.height,
            )
            for r in layout.free_rectangles
        ],
    )


@router.post(
    "",
    response_model=LayoutResponse,
    responses={422: {"model": ErrorResponseSchema}},
)
async def nest_layout(request: NestRequest, command: NestCommandDep) -> LayoutResponse:
    """Compute a layout for the requested pieces.

    Args:
        request: Roll, spacing and piece types.
        command: Injected NestLayoutCommand.

    Returns:
        Placements, metrics and the remaining free space.

    Raises:
        NestingFailedError: If the input is invalid or a piece cannot be placed.
    """
    output = _run(command, request)
    logger.debug("Nested %d pieces", len(output.layout.placements))
    return _layout_output_to_schema(output)


@router.post(
    "/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}},
        422: {"model": ErrorResponseSchema},
    },
)
async def nest_layout_svg(
    request: NestRequest,
    command: NestCommandDep,
    scale: float = Query(default=4.0, gt=0, le=100, description="Pixels per cm"),
) -> Response:
    """Compute a layout and return it as an SVG diagram."""
    output = _run(command, request)
    renderer = LayoutDiagramRenderer(scale=scale)
    return Response(
        content=renderer.render_svg(output.layout),
        media_type="image/svg+xml",
    )


@router.get("/defaults", response_model=NestRequest)
async def get_default_request() -> NestRequest:
    """Return the sample request the tool starts with."""
    return NestRequest(
        fabric=FabricSchema(),
        spacing=SpacingSchema(),
        pieces=[PieceSchema(**piece.model_dump()) for piece in default_pieces()],
    )
