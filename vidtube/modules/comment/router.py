"""评论模块 - 路由"""

from fastapi import APIRouter, Query, status

from vidtube.modules.auth.dependencies import CurrentUser
from vidtube.schemas.response import ApiPagedResponse, ApiResponse

from .dependencies import CommentServiceDep
from .schemas import CommentCreate, CommentResponse

router = APIRouter()


@router.get("/{video_id}/comments", response_model=ApiPagedResponse[CommentResponse])
async def list_comments(
    video_id: str,
    service: CommentServiceDep,
    page: int = Query(default=1, ge=1, description="页码（从 1 开始）"),
    limit: int = Query(default=10, ge=1, le=100),
) -> ApiPagedResponse[CommentResponse]:
    """视频评论（按时间倒序分页）"""
    comments, total = await service.get_video_comments(video_id, page=page, limit=limit)
    return ApiPagedResponse(
        data=comments,
        total=total,
        page=page,
        limit=limit,
        message="Comments fetched successfully",
    )


@router.post(
    "/{video_id}/comments",
    response_model=ApiResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    video_id: str,
    body: CommentCreate,
    user: CurrentUser,
    service: CommentServiceDep,
) -> ApiResponse[CommentResponse]:
    comment = await service.add_comment(video_id, user.id, body.content)
    return ApiResponse(data=comment, message="Comment added successfully")
