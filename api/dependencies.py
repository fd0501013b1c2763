# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: dependencies.py
# -----------------------------------------------------------------------------
from api.AppContainer import app_container
from services.InvoiceChatService import InvoiceChatService
from services.InvoiceDocumentService import InvoiceDocumentService
from services.InvoiceHealthService import InvoiceHealthService
from services.InvoiceIngestService import InvoiceIngestService
from services.InvoiceSpeechService import InvoiceSpeechService


def get_health_service() -> InvoiceHealthService:
    # use the singleton service from the container
    return app_container.health_service


def get_ingest_service() -> InvoiceIngestService:
    # use the singleton service from the container
    return app_container.ingest_service


def get_chat_service() -> InvoiceChatService:
    # use the singleton service from the container
    return app_container.chat_service


def get_document_service() -> InvoiceDocumentService:
    # use the singleton service from the container
    return app_container.document_service


def get_speech_service() -> InvoiceSpeechService:
    # use the singleton service from the container
    return app_container.speech_service
