#!/usr/bin/env python3
"""
Content engine operations tool

Examples:
    content-engine init
    content-engine stats --owner-id user-1
    content-engine search "leading engineering teams" --owner-id user-1 --type context
    content-engine add user-1 "Notes from our platform migration" --type project
    content-engine similar 3f2b...
    content-engine delete 3f2b...
    content-engine analyze-writing user-1
    content-engine export user-1 --output user-1.json
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone

from .core.config import settings
from .core.database import create_tables
from .core.exceptions import ContentEngineError
from .core.logging_config import get_logger, setup_logging
from .models.document import DocumentType
from .services.embedding_service import create_embedding_provider
from .services.vector_store import DocumentStore
from .services.version_store import VersionStore
from .services.writing_style_service import WritingStyleService

PREVIEW_CHARS = 100
TOP_VOCABULARY = 10
DEFAULT_EXPORT_FILE = "vector-export.json"

logger = get_logger(__name__)


def _document_store() -> DocumentStore:
    return DocumentStore(create_embedding_provider())


def _writing_style_service() -> WritingStyleService:
    return WritingStyleService(_document_store(), VersionStore())


def _print_results(results) -> None:
    print(f"📊 Found {len(results)} results\n")
    for index, result in enumerate(results, start=1):
        document = result.document
        print(f"{index}. Similarity: {result.similarity:.3f}")
        print(f"   ID: {document.id}")
        print(f"   Type: {document.document_type.value}")
        print(f"   Content: {document.content[:PREVIEW_CHARS]}...")
        print(f"   Created: {document.created_at}")
        print("")


async def run_init(args) -> int:
    await create_tables()
    print("✅ Content engine tables created")
    return 0


async def run_stats(args) -> int:
    store = _document_store()
    if args.owner_id:
        stats = await store.get_owner_stats(args.owner_id)
        print(f"📊 Document statistics for owner {args.owner_id}:")
    else:
        stats = await store.get_global_stats()
        print("📊 Global document statistics:")

    for document_type, count in sorted(stats.items()):
        print(f"   {document_type}: {count}")
    print(f"📈 Total documents: {sum(stats.values())}")
    return 0


async def run_search(args) -> int:
    store = _document_store()
    results = await store.similarity_search(
        args.query,
        owner_id=args.owner_id,
        document_type=DocumentType(args.type) if args.type else None,
        limit=args.limit,
        threshold=args.threshold,
    )
    print(f"🔍 Search results for: \"{args.query}\"")
    _print_results(results)
    return 0


async def run_add(args) -> int:
    store = _document_store()
    document = await store.store(
        owner_id=args.owner_id,
        content=args.content,
        document_type=DocumentType(args.type),
    )
    print("✅ Document added")
    print(f"📄 Document ID: {document.id}")
    print(f"🔢 Embedding dimensions: {len(document.embedding)}")
    return 0


async def run_similar(args) -> int:
    store = _document_store()
    results = await store.find_similar_documents(args.document_id, limit=args.limit, threshold=args.threshold)
    print(f"🔍 Documents similar to {args.document_id}")
    _print_results(results)
    return 0


async def run_delete(args) -> int:
    store = _document_store()
    if await store.delete(args.document_id):
        print(f"🗑️  Deleted document {args.document_id}")
        return 0
    print(f"⚠️  Document {args.document_id} not found")
    return 1


async def run_analyze_writing(args) -> int:
    service = _writing_style_service()
    profile = await service.refresh_profile(args.owner_id)

    print(f"✍️  Writing style analysis for owner {args.owner_id}:")
    print(f"📝 Tone: {profile.tone}")
    print(f"🎯 Confidence: {profile.confidence * 100:.1f}%")
    print(f"📚 Vocabulary (top {TOP_VOCABULARY}): {', '.join(profile.vocabulary.common_words[:TOP_VOCABULARY])}")
    structure = profile.sentence_structure
    print(
        f"🏗️  Sentence structure: {structure.complexity}, "
        f"{structure.average_length} words on average, variety {structure.variety:.2f}"
    )
    print(f"📋 Topic preferences: {', '.join(profile.content_themes.primary_topics)}")

    phrases = profile.writing_patterns.common_phrases
    if phrases:
        print("💬 Common phrases:")
        for index, phrase in enumerate(phrases, start=1):
            print(f"   {index}. \"{phrase}\"")
    return 0


async def run_export(args) -> int:
    store = _document_store()
    documents = await store.list_by_owner(args.owner_id)

    export_data = {
        "owner_id": args.owner_id,
        "export_date": datetime.now(timezone.utc).isoformat(),
        "document_count": len(documents),
        # Embeddings are excluded
        "documents": [document.model_dump(mode="json", exclude={"embedding"}) for document in documents],
    }
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(export_data, f, indent=2)

    print(f"✅ Exported {len(documents)} documents to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    document_types = [t.value for t in DocumentType]

    parser = argparse.ArgumentParser(prog="content-engine", description="Content engine operations tool")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create database tables")
    init_parser.set_defaults(handler=run_init)

    stats_parser = subparsers.add_parser("stats", help="Document counts per type")
    stats_parser.add_argument("--owner-id", help="Restrict to one owner")
    stats_parser.set_defaults(handler=run_stats)

    search_parser = subparsers.add_parser("search", help="Semantic search")
    search_parser.add_argument("query", help="Search text")
    search_parser.add_argument("--owner-id", help="Restrict to one owner")
    search_parser.add_argument("--type", choices=document_types, help="Restrict to one document type")
    search_parser.add_argument("--limit", type=int, default=settings.SEARCH_DEFAULT_LIMIT)
    search_parser.add_argument("--threshold", type=float, default=settings.SEARCH_DEFAULT_THRESHOLD)
    search_parser.set_defaults(handler=run_search)

    add_parser = subparsers.add_parser("add", help="Store a document")
    add_parser.add_argument("owner_id", help="Owner of the document")
    add_parser.add_argument("content", help="Document text")
    add_parser.add_argument("--type", choices=document_types, default=DocumentType.CONTENT.value)
    add_parser.set_defaults(handler=run_add)

    similar_parser = subparsers.add_parser("similar", help="Documents similar to a stored document")
    similar_parser.add_argument("document_id")
    similar_parser.add_argument("--limit", type=int, default=settings.SIMILAR_DOCUMENTS_DEFAULT_LIMIT)
    similar_parser.add_argument("--threshold", type=float, default=settings.SIMILAR_DOCUMENTS_DEFAULT_THRESHOLD)
    similar_parser.set_defaults(handler=run_similar)

    delete_parser = subparsers.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("document_id")
    delete_parser.set_defaults(handler=run_delete)

    analyze_parser = subparsers.add_parser("analyze-writing", help="Recompute an owner's writing style profile")
    analyze_parser.add_argument("owner_id")
    analyze_parser.set_defaults(handler=run_analyze_writing)

    export_parser = subparsers.add_parser("export", help="Export an owner's documents to JSON")
    export_parser.add_argument("owner_id")
    export_parser.add_argument("--output", default=DEFAULT_EXPORT_FILE, help="Output file")
    export_parser.set_defaults(handler=run_export)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        return asyncio.run(args.handler(args))
    except ContentEngineError as e:
        logger.error(f"Command {args.command} failed: {e.code}")
        print(f"❌ {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
