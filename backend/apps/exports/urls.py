from django.urls import path

from .views import DocxExportView, PdfExportView

urlpatterns = [
    path("pdf/", PdfExportView.as_view(), name="export-pdf"),
    path("docx/", DocxExportView.as_view(), name="export-docx"),
]
