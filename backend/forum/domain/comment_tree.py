"""평면 댓글 목록을 최상위 댓글 + 답글 구조로 변환하는 순수 함수입니다.

입력은 한 게시글의 댓글로 미리 걸러져 있다고 가정합니다. 입력 안에 부모가
없는 답글은 트리에서 제외됩니다(호출 측 버그이므로 사용자에게 노출하지 않음).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List

logger = logging.getLogger(__name__)


@dataclass
class CommentNode:
    comment: Any
    replies: List["CommentNode"] = field(default_factory=list)

    @property
    def comment_id(self) -> int:
        return self.comment.comment_id

    @property
    def parent_id(self) -> int | None:
        return self.comment.parent_id


def build_tree(flat_comments: Iterable[Any]) -> List[CommentNode]:
    nodes = [CommentNode(comment) for comment in flat_comments]
    by_id = {node.comment_id: node for node in nodes}

    roots: List[CommentNode] = []
    for node in nodes:
        if node.parent_id is None:
            roots.append(node)
            continue
        parent = by_id.get(node.parent_id)
        if parent is None:
            logger.debug("[comments] dropped reply %s with missing parent %s", node.comment_id, node.parent_id)
            continue
        parent.replies.append(node)
    return roots


def flatten(tree: Iterable[CommentNode]) -> List[Any]:
    """트리를 순회 순서(부모, 그 답글들, 다음 부모...)의 평면 목록으로 되돌린다."""
    result: List[Any] = []
    stack = list(reversed(list(tree)))
    while stack:
        node = stack.pop()
        result.append(node.comment)
        stack.extend(reversed(node.replies))
    return result
