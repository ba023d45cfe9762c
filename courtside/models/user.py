from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from courtside.database import Base

ROLES = ("player", "coach", "admin")


class User(Base):
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(10), nullable=False, default="player")  # player, coach, admin
    
    # Back-references kept in step with the players table by RosterService.
    # Plain columns (no FK) so users -> teams -> players stays acyclic.
    team_id = Column(Integer, nullable=True, index=True)
    player_profile_id = Column(Integer, nullable=True)
    
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    
    # Relationships
    managed_teams = relationship("Team", back_populates="coach", order_by="Team.id")
    
    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
