from sqlalchemy import Column, Integer, String
from user_api.core.database import Base


class User(Base):
    """
    User record managed through the /users endpoints.

    Email and user_name carry unique constraints; UserService checks both before
    writing and the constraints reject anything that races past those checks.
    Passwords are stored as given.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    street_address = Column(String(150), nullable=False)
    city = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    user_name = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)

    # Fields replaced wholesale by an update; id is never among them
    EDITABLE_FIELDS = (
        "first_name",
        "last_name",
        "email",
        "phone",
        "street_address",
        "city",
        "state",
        "user_name",
        "password",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} user_name={self.user_name!r}>"
