from __future__ import annotations

import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .services.export import ExportService

logger = logging.getLogger(__name__)


class ExportView(APIView):
    permission_classes = [AllowAny]
    export_format = ""
    failure_message = ""

    def post(self, request):
        try:
            result = ExportService().export(self.export_format, request.data)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:
            logger.error("%s export error", self.export_format, exc_info=True)
            return Response({"error": self.failure_message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = HttpResponse(result.content, content_type=result.content_type)
        response["Content-Disposition"] = result.content_disposition
        return response


class PdfExportView(ExportView):
    export_format = "pdf"
    failure_message = "Failed to generate PDF"


class DocxExportView(ExportView):
    export_format = "docx"
    failure_message = "Failed to generate DOCX"
