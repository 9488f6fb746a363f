from .vote_model import Vote, VoteChoice

__all__ = ['Vote', 'VoteChoice']
