import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from seatplan.config import get_settings

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Event(Base):
    __tablename__ = "events"
    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, index=True)

class AttendeeRecord(Base):
    __tablename__ = "attendees"
    id = Column(String, primary_key=True, default=_new_id)
    event_id = Column(String, ForeignKey("events.id"), index=True)
    name = Column(String)
    rsvp_status = Column(String, default="pending")
    category = Column(String, default="other")
    dietary_restrictions = Column(String, nullable=True)

class TableRecord(Base):
    __tablename__ = "tables"
    id = Column(String, primary_key=True, default=_new_id)
    event_id = Column(String, ForeignKey("events.id"), index=True)
    name = Column(String)
    capacity = Column(Integer, nullable=False)
    shape = Column(String, default="round")
    position = Column(Integer, default=0)  # order in which tables are considered

class SeatRecord(Base):
    __tablename__ = "seats"
    id = Column(String, primary_key=True, default=_new_id)
    table_id = Column(String, ForeignKey("tables.id"), index=True)
    guest_id = Column(String, ForeignKey("attendees.id"), nullable=True)

class RelationshipRecord(Base):
    __tablename__ = "guest_relationships"
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String, ForeignKey("events.id"), index=True)
    guest_id = Column(String, ForeignKey("attendees.id"))
    related_guest_id = Column(String, ForeignKey("attendees.id"))
    relationship_type = Column(String)
    strength = Column(Integer)


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


engine = make_engine(get_settings().database_url)
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def init_db(bind: Engine = engine):
    Base.metadata.create_all(bind=bind)
