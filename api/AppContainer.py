# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import settings
from chat.ConversationLog import ConversationLog
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.InvoiceEmbedder import InvoiceEmbedder
from extractor.InvoiceTextExtractor import InvoiceTextExtractor
from parsing.InvoiceFieldParser import InvoiceFieldParser
from retrieval.InvoiceRetriever import InvoiceRetriever
from services.InvoiceChatService import InvoiceChatService
from services.InvoiceDocumentService import InvoiceDocumentService
from services.InvoiceFileService import InvoiceFileService
from services.InvoiceHealthService import InvoiceHealthService
from services.InvoiceIngestService import InvoiceIngestService
from services.InvoiceQueryService import InvoiceQueryService
from services.InvoiceSpeechService import InvoiceSpeechService
from utility.logging_utils import get_logger
from vectorstore.InMemoryInvoiceStore import InMemoryInvoiceStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        get_logger("AppContainer").info("Config: %r", self.cfg.summary())

        # Core infrastructure
        self.embedder = InvoiceEmbedder.from_config(
            self.cfg,
            dim=settings.EMBEDDING_DIM,
            request_timeout=settings.OPENAI_REQUEST_TIMEOUT_SECONDS,
        )
        self.store = InMemoryInvoiceStore(dim=settings.EMBEDDING_DIM)
        self.retriever = InvoiceRetriever(self.store, default_k=settings.TOP_K)

        # Infrastructure for ingestion pipeline
        self.extractor = InvoiceTextExtractor(
            lang=settings.OCR_LANG,
            timeout_seconds=settings.OCR_TIMEOUT_SECONDS,
        )
        self.parser = InvoiceFieldParser()
        self.file_service = InvoiceFileService(
            upload_dir=settings.UPLOAD_DIR,
            enabled=settings.KEEP_UPLOADS,
        )

        # Optional collaborators: absent key -> templated answers / 503 speech
        self.openai_chat = (
            OpenAIChat(cfg=self.cfg, request_timeout=settings.OPENAI_REQUEST_TIMEOUT_SECONDS)
            if self.cfg.openai_configured else None
        )
        self.speech_service = InvoiceSpeechService(cfg=self.cfg)

        # Return a singleton InvoiceIngestService instance
        self.ingest_service = InvoiceIngestService(
            extractor=self.extractor,
            parser=self.parser,
            embedder=self.embedder,
            store=self.store,
            file_service=self.file_service,
            min_text_length=settings.MIN_TEXT_LENGTH,
            max_files=settings.MAX_FILES_PER_UPLOAD,
        )

        # Return a singleton InvoiceQueryService instance
        self.query_service = InvoiceQueryService(
            embedder=self.embedder,
            retriever=self.retriever,
            n_results=settings.TOP_K,
        )

        # Return a singleton InvoiceChatService instance
        self.chat_service = InvoiceChatService(
            query_service=self.query_service,
            chat_client=self.openai_chat,
            conversation_log=ConversationLog(
                max_messages=settings.MAX_MESSAGES_PER_CONVERSATION,
                max_conversations=settings.MAX_CONVERSATIONS,
            ),
            relevance_threshold=settings.RELEVANCE_THRESHOLD,
            top_k=settings.TOP_K,
            temperature=settings.CHAT_TEMPERATURE,
            max_tokens=settings.CHAT_MAX_TOKENS,
            text_preview_chars=settings.TEXT_PREVIEW_CHARS,
        )

        # Return a singleton InvoiceDocumentService instance
        self.document_service = InvoiceDocumentService(
            store=self.store,
            file_service=self.file_service,
        )

        # Return a singleton InvoiceHealthService instance
        self.health_service = InvoiceHealthService(
            extractor=self.extractor,
            embedder=self.embedder,
            store=self.store,
            speech_service=self.speech_service,
            chat_client=self.openai_chat,
        )


# Singleton container instance
app_container = AppContainer()
