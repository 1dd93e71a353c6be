"""
Commission Repository - Data Access Layer for Commissions and their messages
"""
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from artverse.models import Commission, CommissionMessage


class CommissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Commission).options(
            joinedload(Commission.buyer),
            joinedload(Commission.artist),
            selectinload(Commission.messages),
        )

    def find_by_id(self, commission_id: str) -> Optional[Commission]:
        return self._query().filter(Commission.id == commission_id).first()

    def find_for_party(self, commission_id: str, user_id: str) -> Optional[Commission]:
        """Commission only if the user is its buyer or artist"""
        commission = self.find_by_id(commission_id)
        if commission and commission.is_party(user_id):
            return commission
        return None

    def find_for_user(self, user_id: str, role: str, status: Optional[str] = None) -> List[Commission]:
        """Own commissions, as buyer or as artist depending on the role"""
        owner_column = Commission.artist_id if role == "artist" else Commission.buyer_id
        query = self._query().filter(owner_column == user_id)
        if status:
            query = query.filter(Commission.status == status)
        return query.order_by(Commission.created_at.desc()).all()

    def count_by_status(self, user_id: str, role: str) -> dict:
        commissions = self.find_for_user(user_id, role)
        counts = {}
        for commission in commissions:
            counts[commission.status] = counts.get(commission.status, 0) + 1
        return counts

    def create(self, buyer_id: str, artist_id: str, **fields) -> Commission:
        commission = Commission(buyer_id=buyer_id, artist_id=artist_id, status="pending", **fields)
        commission.messages.append(CommissionMessage(sender="buyer", content=fields["description"]))
        self.db.add(commission)
        self.db.flush()
        return commission

    def add_message(self, commission: Commission, sender: str, content: str) -> CommissionMessage:
        message = CommissionMessage(sender=sender, content=content)
        commission.messages.append(message)
        self.db.flush()
        return message
