"""Заполнение пустой базы демонстрационными данными.

Запуск: ``python -m collabdocs.scripts.seed`` или ``collabdocs-seed``.
Существующие пользователи, документы, комментарии и ответы удаляются.
"""
import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.core.config import settings
from collabdocs.core.db import SessionLocal, init_models
from collabdocs.db.base import new_id
from collabdocs.db.models import Comment, Document, Reply, User
from collabdocs.domains.documents.content import BLOCK_SEPARATOR, block_text

logger = logging.getLogger(__name__)

BATCH_SIZE = 500

FIRST_NAMES = [
    "Alice", "Boris", "Chen", "Dana", "Elif", "Farid", "Greta", "Hiro", "Ines", "Jonas",
    "Kira", "Lucas", "Maya", "Nikolai", "Olga", "Pedro", "Quinn", "Rosa", "Sami", "Tomas",
]
LAST_NAMES = [
    "Ivanova", "Smith", "Nakamura", "Garcia", "Kowalski", "Novak", "Berg", "Rossi",
    "Okafor", "Larsen", "Dubois", "Petrov", "Silva", "Weber", "Kim",
]
WORDS = (
    "alpha beta review draft budget team roadmap launch metric quality customer release "
    "scope timeline risk owner summary feedback design service platform support market "
    "process update research goal plan report data strategy partner section detail"
).split()
TITLE_TEMPLATES = [
    "{adjective} {noun} Guide",
    "Q{quarter} Report",
    "Meeting Notes: {name}",
    "Project: {noun} {noun2}",
    "{sentence}",
]
ADJECTIVES = ["Quarterly", "Annual", "Internal", "Technical", "Product", "Onboarding", "Migration"]
COMMENT_TEMPLATES = [
    "Can we clarify this section?",
    "I think we should revisit this.",
    "This needs to be updated.",
    "Great point!",
    "Consider rephrasing this part.",
    "Can we add more detail here?",
    "+1 on this approach",
    "Let's discuss this further.",
    "Is this still accurate?",
]
REPLY_TEMPLATES = [
    "Good point!",
    "I agree.",
    "Fixed!",
    "Done.",
    "Let's discuss offline.",
    "I'll handle this.",
    "Makes sense.",
    "Thanks for catching this!",
]


def weighted_choice(rng: random.Random, options: Sequence[Tuple[Any, int]]) -> Any:
    values = [value for value, _ in options]
    weights = [weight for _, weight in options]
    return rng.choices(values, weights=weights, k=1)[0]


def sentence(rng: random.Random, min_words: int = 4, max_words: int = 10) -> str:
    words = rng.sample(WORDS, rng.randint(min_words, max_words))
    return " ".join(words).capitalize() + "."


def paragraph(rng: random.Random) -> str:
    return " ".join(sentence(rng) for _ in range(rng.randint(2, 4)))


def random_between(rng: random.Random, start: datetime, end: datetime) -> datetime:
    if end <= start:
        return start
    return start + timedelta(seconds=rng.uniform(0, (end - start).total_seconds()))


def generate_title(rng: random.Random) -> str:
    template = rng.choice(TITLE_TEMPLATES)
    return template.format(
        adjective=rng.choice(ADJECTIVES),
        noun=rng.choice(WORDS).capitalize(),
        noun2=rng.choice(WORDS).capitalize(),
        quarter=rng.randint(1, 4),
        name=rng.choice(LAST_NAMES),
        sentence=sentence(rng, 3, 6).rstrip("."),
    )


def generate_content(rng: random.Random) -> Dict[str, Any]:
    """Заголовок и 3-6 абзацев"""
    blocks = [{
        "type": "heading",
        "attrs": {"level": 1},
        "content": [{"type": "text", "text": sentence(rng).rstrip(".")}],
    }]
    for _ in range(rng.randint(3, 6)):
        blocks.append({"type": "paragraph", "content": [{"type": "text", "text": paragraph(rng)}]})
    return {"type": "doc", "content": blocks}


def pick_selection(rng: random.Random, content: Dict[str, Any]) -> Tuple[int, str]:
    """Фрагмент текста одного блока и его смещение в плоском тексте"""
    blocks = content["content"]
    index = rng.randrange(len(blocks))
    offset = sum(len(block_text(block)) + len(BLOCK_SEPARATOR) for block in blocks[:index])

    text = block_text(blocks[index])
    length = min(len(text), rng.randint(10, 60))
    start = rng.randint(0, len(text) - length)
    return offset + start, text[start:start + length]


def build_users(rng: random.Random, count: int) -> List[Dict[str, Any]]:
    users = []
    for i in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        user_id = f"user_{i}_{new_id()[:8]}"
        users.append({
            "id": user_id,
            "name": f"{first} {last}",
            "email": f"{first}.{last}.{i}@example.com".lower(),
            "avatar_url": f"https://i.pravatar.cc/150?u={user_id}",
        })
    return users


def build_documents(rng: random.Random, count: int, now: datetime) -> List[Dict[str, Any]]:
    documents = []
    for i in range(count):
        created_at = now - timedelta(days=rng.uniform(0, 365))
        updated_at = max(created_at, now - timedelta(days=rng.uniform(0, 30)))
        documents.append({
            "id": f"doc_{i}_{new_id()[:8]}",
            "title": generate_title(rng),
            "content": generate_content(rng),
            "created_at": created_at,
            "updated_at": updated_at,
        })
    return documents


def build_threads(
    rng: random.Random,
    documents: List[Dict[str, Any]],
    users: List[Dict[str, Any]],
    now: datetime
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    comments: List[Dict[str, Any]] = []
    replies: List[Dict[str, Any]] = []

    for document in documents:
        num_comments = weighted_choice(rng, [
            (rng.randint(0, 3), 50),
            (rng.randint(4, 10), 30),
            (rng.randint(11, 20), 15),
            (rng.randint(21, 30), 5),
        ])

        for _ in range(num_comments):
            selection_from, highlighted_text = pick_selection(rng, document["content"])
            created_at = random_between(rng, document["created_at"], now)
            comment_id = f"comment_{len(comments)}_{new_id()[:8]}"

            comments.append({
                "id": comment_id,
                "document_id": document["id"],
                "user_id": rng.choice(users)["id"],
                "highlighted_text": highlighted_text,
                "selection_from": selection_from,
                "selection_to": selection_from + len(highlighted_text),
                "content": rng.choice(COMMENT_TEMPLATES + [sentence(rng)]),
                "is_resolved": rng.random() < 0.25,
                "created_at": created_at,
                "updated_at": created_at,
            })

            num_replies = weighted_choice(rng, [
                (0, 40),
                (rng.randint(1, 2), 35),
                (rng.randint(3, 5), 20),
                (rng.randint(6, 8), 5),
            ])
            for _ in range(num_replies):
                reply_created_at = random_between(rng, created_at, now)
                replies.append({
                    "id": f"reply_{len(replies)}_{new_id()[:8]}",
                    "comment_id": comment_id,
                    "user_id": rng.choice(users)["id"],
                    "content": rng.choice(REPLY_TEMPLATES + [sentence(rng)]),
                    "created_at": reply_created_at,
                    "updated_at": reply_created_at,
                })

    return comments, replies


async def insert_in_batches(session: AsyncSession, model, rows: List[Dict[str, Any]], label: str) -> None:
    for i in range(0, len(rows), BATCH_SIZE):
        await session.execute(insert(model), rows[i:i + BATCH_SIZE])
        logger.info("Inserted %d/%d %s", min(i + BATCH_SIZE, len(rows)), len(rows), label)


async def seed_database(
    session: AsyncSession,
    users_count: int = 20,
    documents_count: int = 100,
    rng: Optional[random.Random] = None
) -> Dict[str, int]:
    """Очистка таблиц и генерация данных; возвращает количество созданных записей"""
    rng = rng or random.Random()
    now = datetime.now(timezone.utc)

    logger.info("Cleaning existing data")
    for model in (Reply, Comment, Document, User):
        await session.execute(delete(model))

    users = build_users(rng, users_count)
    documents = build_documents(rng, documents_count, now)
    comments, replies = build_threads(rng, documents, users, now) if users else ([], [])

    for i, row in enumerate(users):
        row["created_at"] = row["updated_at"] = now - timedelta(minutes=len(users) - i)
    await insert_in_batches(session, User, users, "users")
    await insert_in_batches(session, Document, documents, "documents")
    await insert_in_batches(session, Comment, comments, "comments")
    await insert_in_batches(session, Reply, replies, "replies")
    await session.commit()

    summary = {
        "users": len(users),
        "documents": len(documents),
        "comments": len(comments),
        "replies": len(replies),
    }
    logger.info("Seed completed: %s", summary)
    return summary


async def run() -> Dict[str, int]:
    await init_models()
    async with SessionLocal() as session:
        return await seed_database(session)


def main() -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run())


if __name__ == "__main__":
    main()
