from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import BlockTypeNotFound
from .registry import get_block_type, render_block
from .serializers import BlockRendererSerializer


class BlockRendererAPI(APIView):
    """
    Server-side preview of a dynamic block:
      GET  /api/block-renderer/<namespace>/<name>/?post_id=1&attributes={"className":"x"}
      POST /api/block-renderer/<namespace>/<name>/  {"post_id": 1, "attributes": {...}}
    """

    def get(self, request, namespace, name):
        return self._render(f"{namespace}/{name}", request.query_params)

    def post(self, request, namespace, name):
        return self._render(f"{namespace}/{name}", request.data)

    def _render(self, block_name, data):
        try:
            get_block_type(block_name)
        except BlockTypeNotFound as e:
            raise NotFound(str(e))

        serializer = BlockRendererSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        rendered = render_block(
            block_name,
            serializer.validated_data["attributes"],
            context={"postId": serializer.validated_data.get("post_id")},
        )
        return Response({"rendered": rendered})
