import logging
from user_api.core.database import Base, SessionLocal, engine
from user_api.core.exceptions import UserConflictError
from user_api.core.logging import configure_logging
from user_api.schemas.user import UserPayload
from user_api.services.user_service import user_service

logger = logging.getLogger("seed_users")

SAMPLE_USERS = [
    {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "ann.lee@example.com",
        "phone": "+1 (555) 010-0001",
        "streetAddress": "1 Main Street",
        "city": "Springfield",
        "state": "IL",
        "userName": "annlee",
        "password": "secret1",
    },
    {
        "firstName": "Joanne",
        "lastName": "Park",
        "email": "joanne.park@example.com",
        "phone": "555-010-0002",
        "streetAddress": "22 Oak Avenue",
        "city": "Portland",
        "state": "OR",
        "userName": "jpark",
        "password": "secret2",
    },
    {
        "firstName": "Bob",
        "lastName": "Smith",
        "email": "bob.smith@example.com",
        "phone": "555.010.0003 x12",
        "streetAddress": "300 Pine Road",
        "userName": "bsmith",
        "password": "secret3",
    },
]


def seed() -> int:
    """Insert the sample users that are not already present"""
    Base.metadata.create_all(bind=engine)
    created = 0
    db = SessionLocal()
    try:
        for data in SAMPLE_USERS:
            try:
                user_service.create_user(db, UserPayload(**data))
                created += 1
            except UserConflictError as e:
                logger.info(f"Skipping {data['userName']}: {e.message}")
    finally:
        db.close()
    return created


if __name__ == "__main__":
    configure_logging()
    print(f"Created {seed()} sample users")
