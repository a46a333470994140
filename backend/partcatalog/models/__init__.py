from .organization import Organization, Application
from .part import Part
from .part_organization_detail import PartOrganizationDetail
from .part_application import PartApplication
from .user import AppUser
from .order_item import OrderItem, CartItem
__all__ = ["Organization","Application","Part","PartOrganizationDetail","PartApplication","AppUser","OrderItem","CartItem"]
