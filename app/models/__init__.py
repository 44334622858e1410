from app.models.user import User, Organization, OrganizationResponsible
from app.models.tender import Tender, TenderHistory
from app.models.bid import Bid, BidFeedback
