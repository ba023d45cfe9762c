from sqlalchemy import Column, Integer, String, Float, ForeignKey, UniqueConstraint, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from courtside.database import Base

POSITIONS = ("PG", "SG", "SF", "PF", "C")


class Player(Base):
    __tablename__ = "players"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=True, index=True)  # null once released
    position = Column(String(2), nullable=False)  # PG, SG, SF, PF, C
    jersey_number = Column(Integer, nullable=False)
    height = Column(String(10), nullable=False)  # e.g., "6-3"
    weight = Column(Integer, nullable=False)  # lbs
    age = Column(Integer, nullable=False)
    
    # Per-game averages
    points_per_game = Column(Float, nullable=False, default=0.0)
    rebounds_per_game = Column(Float, nullable=False, default=0.0)
    assists_per_game = Column(Float, nullable=False, default=0.0)
    steals_per_game = Column(Float, nullable=False, default=0.0)
    blocks_per_game = Column(Float, nullable=False, default=0.0)
    
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    
    # Relationships
    user = relationship("User")
    team = relationship("Team", back_populates="players")
    
    __table_args__ = (
        UniqueConstraint("team_id", "jersey_number", name="uq_player_team_jersey"),
    )
    
    def __repr__(self):
        return f"<Player #{self.jersey_number} {self.name}>"
