from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from courtside.database import Base


class GameStat(Base):
    """One player's box score line for a game."""
    __tablename__ = "game_stats"
    
    id = Column(Integer, primary_key=True, index=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=True, index=True)
    
    points = Column(Integer, nullable=False, default=0)
    rebounds = Column(Integer, nullable=False, default=0)
    assists = Column(Integer, nullable=False, default=0)
    steals = Column(Integer, nullable=False, default=0)
    blocks = Column(Integer, nullable=False, default=0)
    minutes_played = Column(Integer, nullable=False, default=0)
    
    # Relationships
    game = relationship("Game", back_populates="game_stats")
    player = relationship("Player")
    
    def __repr__(self):
        return f"<GameStat {self.player_id} - Game {self.game_id}>"
