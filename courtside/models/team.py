from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Boolean, Text, event
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from courtside.database import Base


class Team(Base):
    __tablename__ = "teams"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    coach_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    founded_year = Column(Integer, nullable=True)
    home_venue = Column(String(100), nullable=True)
    primary_color = Column(String(20), default="#000000")
    secondary_color = Column(String(20), default="#FFFFFF")
    logo = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, index=True)
    
    # Season record
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    win_percentage = Column(Float, nullable=False, default=0.0)
    
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    
    # Relationships
    coach = relationship("User", back_populates="managed_teams")
    players = relationship("Player", back_populates="team", order_by="Player.id")
    
    def recompute_win_percentage(self) -> float:
        wins = self.wins or 0
        losses = self.losses or 0
        total = wins + losses
        self.win_percentage = wins / total if total > 0 else 0.0
        return self.win_percentage
    
    def __repr__(self):
        return f"<Team {self.name}>"


@event.listens_for(Team, "before_insert")
@event.listens_for(Team, "before_update")
def _recompute_win_percentage(mapper, connection, target: Team):
    target.recompute_win_percentage()
