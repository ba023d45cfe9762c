from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from courtside.database import Base

GAME_STATUSES = ("scheduled", "in_progress", "completed", "cancelled")


class Game(Base):
    __tablename__ = "games"
    
    id = Column(Integer, primary_key=True, index=True)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    
    home_score = Column(Integer, nullable=False, default=0)
    away_score = Column(Integer, nullable=False, default=0)
    game_date = Column(DateTime, nullable=False, index=True)  # naive UTC
    status = Column(String(20), nullable=False, default="scheduled")
    quarter = Column(Integer, nullable=False, default=1)
    time_remaining = Column(String(10), nullable=False, default="12:00")
    venue = Column(String(100), nullable=True)
    attendance = Column(Integer, nullable=True)
    
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    
    # Relationships
    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
    game_stats = relationship(
        "GameStat",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="GameStat.id",
    )
    
    def team_ids(self) -> tuple[int, int]:
        return self.home_team_id, self.away_team_id
    
    def __repr__(self):
        return f"<Game {self.id}: {self.away_team_id} @ {self.home_team_id}>"
