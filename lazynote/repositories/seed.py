import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from lazynote.core.config import settings
from lazynote.core.security import hash_password
from lazynote.models import (
    AuthToken,
    Document,
    Flashcard,
    FlashcardSet,
    Quiz,
    QuizAttempt,
    QuizQuestion,
    User,
)

logger = logging.getLogger(__name__)

DEMO_USER_ID = "user123"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


USERS = [
    {"id": DEMO_USER_ID, "name": "John Doe", "email": "john.doe@example.com"},
]

DOCUMENTS = [
    {
        "id": "doc2",
        "title": "Data Structures and Algorithms",
        "type": "ppt",
        "created_at": _ts("2023-04-10T14:20:00Z"),
        "flashcard_count": 32,
        "quiz_count": 2,
    },
    {
        "id": "doc3",
        "title": "Web Development Basics",
        "type": "pdf",
        "created_at": _ts("2023-04-05T09:15:00Z"),
        "flashcard_count": 28,
        "quiz_count": 1,
    },
]

FLASHCARD_SETS = [
    {
        "id": "set1",
        "title": "Machine Learning Fundamentals",
        "description": "Key concepts in machine learning",
        "tags": ["ML", "AI", "Data Science"],
        "created_at": _ts("2025-03-30T10:30:00Z"),
        "updated_at": _ts("2025-03-30T14:20:00Z"),
        "card_count": 45,
        "mastered": 20,
        "document_id": "doc1",
        "last_studied_at": _ts("2025-03-30T15:30:00Z"),
    },
    {
        "id": "set2",
        "title": "Data Structures",
        "description": "Common data structures in computer science",
        "tags": ["CS", "Programming", "Algorithms"],
        "created_at": _ts("2025-03-30T11:20:00Z"),
        "updated_at": _ts("2025-03-30T12:15:00Z"),
        "card_count": 32,
        "mastered": 15,
        "document_id": "doc2",
        "last_studied_at": _ts("2025-03-30T13:30:00Z"),
    },
    {
        "id": "set3",
        "title": "Web Development Basics",
        "description": "HTML, CSS, and JavaScript fundamentals",
        "tags": ["Web", "Frontend", "HTML"],
        "created_at": _ts("2025-03-30T09:15:00Z"),
        "updated_at": _ts("2025-03-30T11:30:00Z"),
        "card_count": 28,
        "mastered": 22,
        "document_id": "doc3",
        "last_studied_at": _ts("2025-03-30T14:15:00Z"),
    },
    {
        "id": "dummy-set-123",
        "title": "Recently Generated Flashcards",
        "description": "Automatically generated from your uploaded document",
        "tags": ["Generated", "AI"],
        "created_at": _ts("2025-03-30T16:00:00Z"),
        "updated_at": _ts("2025-03-30T16:00:00Z"),
        "card_count": 15,
        "mastered": 0,
        "document_id": "doc-new",
        "last_studied_at": None,
    },
]

# set_id -> [(id, question, answer, mastered, last_reviewed, difficulty)]
FLASHCARDS = {
    "set1": [
        ("card1", "What is supervised learning?",
         "A type of machine learning where the model is trained on labeled data and learns to predict outputs based on inputs.",
         True, "2023-04-20T15:30:00Z", "medium"),
        ("card2", "What is the difference between classification and regression?",
         "Classification predicts discrete class labels, while regression predicts continuous values.",
         True, "2023-04-19T10:15:00Z", "medium"),
        ("card3", "What is overfitting?",
         "When a model learns the training data too well, including noise and outliers, resulting in poor performance on new, unseen data.",
         False, "2023-04-18T14:45:00Z", "hard"),
        ("card4", "What is gradient descent?",
         "An optimization algorithm used to minimize a function by iteratively moving in the direction of steepest descent.",
         False, "2023-04-17T11:20:00Z", "hard"),
        ("card5", "What is a neural network?",
         "A computational model inspired by the human brain, consisting of interconnected nodes (neurons) organized in layers.",
         False, None, "medium"),
    ],
    "set2": [
        ("card6", "What is a stack?",
         "A linear data structure that follows the Last In First Out (LIFO) principle.",
         True, "2023-04-14T09:30:00Z", "easy"),
        ("card7", "What is a queue?",
         "A linear data structure that follows the First In First Out (FIFO) principle.",
         True, "2023-04-13T16:45:00Z", "easy"),
        ("card8", "What is a binary search tree?",
         "A tree data structure where each node has at most two children, and for each node, all elements in the left subtree are less than the node, and all elements in the right subtree are greater.",
         False, "2023-04-12T13:20:00Z", "medium"),
        ("card9", "What is the time complexity of quicksort in the average case?",
         "O(n log n)", False, None, "medium"),
    ],
    "set3": [
        ("card10", "What does HTML stand for?", "HyperText Markup Language",
         True, "2023-04-10T10:15:00Z", "easy"),
        ("card11", "What does CSS stand for?", "Cascading Style Sheets",
         True, "2023-04-09T14:30:00Z", "easy"),
        ("card12", "What is the box model in CSS?",
         "A layout concept that describes how elements are rendered with content, padding, border, and margin areas.",
         True, "2023-04-08T11:45:00Z", "medium"),
        ("card13", "What is the difference between == and === in JavaScript?",
         "== compares values with type coercion, while === compares both values and types without coercion.",
         False, "2023-04-07T09:20:00Z", "medium"),
    ],
    "dummy-set-123": [
        ("gen-card1", "What is LazyNote?",
         "An AI-powered study tool that helps students create flashcards and quizzes from their lecture materials.",
         False, None, "easy"),
        ("gen-card2", "How does LazyNote generate flashcards?",
         "LazyNote uses advanced AI to analyze uploaded documents and automatically extract key concepts and questions.",
         False, None, "medium"),
        ("gen-card3", "What file formats does LazyNote support?",
         "LazyNote supports PDF, Word, PowerPoint, Text, and Images.",
         False, None, "easy"),
    ],
}

QUIZZES = [
    {
        "id": "quiz1",
        "title": "Machine Learning Fundamentals",
        "description": "Test your knowledge of key machine learning concepts",
        "document_id": "doc1",
        "created_at": _ts("2025-03-30T10:30:00Z"),
        "updated_at": _ts("2025-03-30T14:20:00Z"),
        "question_count": 10,
        "completed_count": 3,
        "last_attempted_at": _ts("2025-03-30T15:30:00Z"),
        "average_score": 85,
        "tags": ["ML", "AI", "Data Science"],
    },
    {
        "id": "quiz2",
        "title": "Data Structures",
        "description": "Test your understanding of common data structures",
        "document_id": "doc2",
        "created_at": _ts("2025-03-30T11:20:00Z"),
        "updated_at": _ts("2025-03-30T12:15:00Z"),
        "question_count": 8,
        "completed_count": 2,
        "last_attempted_at": _ts("2025-03-30T13:30:00Z"),
        "average_score": 75,
        "tags": ["CS", "Programming", "Algorithms"],
    },
    {
        "id": "quiz3",
        "title": "Web Development Basics",
        "description": "Test your knowledge of HTML, CSS, and JavaScript",
        "document_id": "doc3",
        "created_at": _ts("2025-03-30T09:15:00Z"),
        "updated_at": _ts("2025-03-30T11:30:00Z"),
        "question_count": 12,
        "completed_count": 4,
        "last_attempted_at": _ts("2025-03-30T14:15:00Z"),
        "average_score": 92,
        "tags": ["Web", "Frontend", "HTML"],
    },
    {
        "id": "dummy-quiz-123",
        "title": "Recently Generated Quiz",
        "description": "Automatically generated from your uploaded document",
        "document_id": "doc-new",
        "created_at": None,
        "updated_at": None,
        "question_count": 8,
        "completed_count": 0,
        "last_attempted_at": None,
        "average_score": 0,
        "tags": ["Generated", "AI"],
    },
]

# quiz_id -> [(id, question, options, correct_option_index, explanation, difficulty)]
QUIZ_QUESTIONS = {
    "quiz1": [
        ("q1", "What is supervised learning?",
         ["Learning without labeled data",
          "Learning with labeled data to predict outputs",
          "Learning by reinforcement",
          "Learning by clustering similar data"],
         1, "Supervised learning uses labeled data to train models to predict outputs based on inputs.",
         "medium"),
        ("q2", "Which of the following is NOT a type of machine learning?",
         ["Supervised learning", "Unsupervised learning",
          "Reinforcement learning", "Descriptive learning"],
         3, "The three main types of machine learning are supervised, unsupervised, and reinforcement learning.",
         "easy"),
        ("q3", "What is the purpose of a loss function in machine learning?",
         ["To measure the accuracy of predictions",
          "To generate new training data",
          "To visualize the model's structure",
          "To compress the model for deployment"],
         0, "A loss function measures how well the model's predictions match the actual values.",
         "medium"),
    ],
    "quiz2": [
        ("q4", "Which data structure follows the Last In First Out (LIFO) principle?",
         ["Queue", "Stack", "Linked List", "Binary Tree"],
         1, "A stack follows the Last In First Out (LIFO) principle.", "easy"),
        ("q5", "What is the time complexity of binary search in a sorted array?",
         ["O(1)", "O(n)", "O(log n)", "O(n log n)"],
         2, "Binary search has a time complexity of O(log n) because it divides the search space in half with each step.",
         "medium"),
        ("q6", "Which of the following is NOT a balanced binary search tree?",
         ["AVL Tree", "Red-Black Tree", "B-Tree", "Binary Search Tree"],
         3, "A regular Binary Search Tree is not necessarily balanced, while AVL, Red-Black, and B-Trees are balanced tree structures.",
         "hard"),
    ],
    "quiz3": [
        ("q7", "Which HTML tag is used to create a hyperlink?",
         ["<link>", "<a>", "<href>", "<url>"],
         1, "The <a> (anchor) tag is used to create hyperlinks in HTML.", "easy"),
        ("q8", "Which CSS property is used to change the text color?",
         ["text-color", "font-color", "color", "text-style"],
         2, "The 'color' property is used to change the text color in CSS.", "easy"),
        ("q9", "What does the 'let' keyword do in JavaScript?",
         ["Declares a constant variable",
          "Declares a block-scoped variable",
          "Declares a global variable",
          "Declares a function"],
         1, "The 'let' keyword declares a block-scoped variable in JavaScript.", "medium"),
    ],
}

# (id, quiz_id, started_at, completed_at, score, total_questions, correct_answers)
QUIZ_ATTEMPTS = [
    ("attempt1", "quiz1", "2025-03-30T15:00:00Z", "2025-03-30T15:15:00Z", 80, 10, 8),
    ("attempt2", "quiz1", "2025-03-29T14:00:00Z", "2025-03-29T14:12:00Z", 90, 10, 9),
    ("attempt3", "quiz2", "2025-03-30T13:00:00Z", "2025-03-30T13:10:00Z", 75, 8, 6),
    ("attempt4", "quiz3", "2025-03-30T14:00:00Z", "2025-03-30T14:15:00Z", 92, 12, 11),
    ("attempt5", "quiz3", "2025-03-28T16:00:00Z", "2025-03-28T16:18:00Z", 83, 12, 10),
]


def seed_database(db: Session) -> None:
    """Load the demo fixtures; does nothing if the demo user already exists"""
    if db.query(User).filter(User.id == DEMO_USER_ID).first():
        return

    now = datetime.now(timezone.utc)

    for user in USERS:
        db.add(User(password_hash=hash_password(settings.DEMO_PASSWORD), **user))
    db.add(AuthToken(token=settings.DEMO_TOKEN, user_id=DEMO_USER_ID))

    for document in DOCUMENTS:
        db.add(Document(user_id=DEMO_USER_ID, **document))

    for flashcard_set in FLASHCARD_SETS:
        db.add(FlashcardSet(user_id=DEMO_USER_ID, **flashcard_set))
    for set_id, cards in FLASHCARDS.items():
        for position, (card_id, question, answer, mastered, reviewed, difficulty) in enumerate(cards):
            db.add(
                Flashcard(
                    id=card_id,
                    set_id=set_id,
                    position=position,
                    question=question,
                    answer=answer,
                    mastered=mastered,
                    last_reviewed=_ts(reviewed) if reviewed else None,
                    difficulty=difficulty,
                )
            )

    for quiz in QUIZZES:
        data = dict(quiz)
        data["created_at"] = data["created_at"] or now
        data["updated_at"] = data["updated_at"] or now
        db.add(Quiz(user_id=DEMO_USER_ID, **data))
    for quiz_id, questions in QUIZ_QUESTIONS.items():
        for position, (question_id, text, options, correct, explanation, difficulty) in enumerate(questions):
            db.add(
                QuizQuestion(
                    id=question_id,
                    quiz_id=quiz_id,
                    position=position,
                    question=text,
                    options=options,
                    correct_option_index=correct,
                    explanation=explanation,
                    difficulty=difficulty,
                )
            )

    for attempt_id, quiz_id, started, completed, score, total, correct in QUIZ_ATTEMPTS:
        db.add(
            QuizAttempt(
                id=attempt_id,
                quiz_id=quiz_id,
                user_id=DEMO_USER_ID,
                started_at=_ts(started),
                completed_at=_ts(completed),
                score=score,
                total_questions=total,
                correct_answers=correct,
            )
        )

    db.commit()
    logger.info("🌱 Demo data loaded")
