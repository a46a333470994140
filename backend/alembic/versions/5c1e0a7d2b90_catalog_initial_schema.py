"""catalog initial schema

Revision ID: 5c1e0a7d2b90
Revises:
Create Date: 2026-10-17 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e0a7d2b90'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    # Kimlik servisinin tabloları (katalog sadece okur)
    op.create_table(
        "Organization",
        sa.Column("OrganizationID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Name", sa.String(200), nullable=False),
    )
    op.create_table(
        "Application",
        sa.Column("ApplicationID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("OrganizationID", sa.Integer(), sa.ForeignKey("Organization.OrganizationID"), nullable=False),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Description", sa.String(1000)),
    )
    op.create_table(
        "AppUser",
        sa.Column("UserID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("Username", sa.String(50), nullable=False, unique=True),
        sa.Column("FullName", sa.String(100)),
        sa.Column("Email", sa.String(200)),
        sa.Column("HashedPassword", sa.String(255), nullable=False),
        sa.Column("Role", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.Column("OrganizationID", sa.Integer(), sa.ForeignKey("Organization.OrganizationID")),
        sa.Column("CanViewPricing", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("IsActive", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
        sa.CheckConstraint("Role in ('admin','cyntek_admin','org_admin','user')", name="CK_AppUser_Role"),
    )

    # Katalog
    op.create_table(
        "Part",
        sa.Column("PartID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ManufacturerPartNumber", sa.String(100), nullable=False),
        sa.Column("ClientPartNumber", sa.String(100)),
        sa.Column("Name", sa.String(200), nullable=False),
        sa.Column("Description", sa.Text()),
        sa.Column("Manufacturer", sa.String(200), nullable=False),
        sa.Column("PartType", sa.String(100)),
        sa.Column("Machine", sa.String(200)),
        sa.Column("Assembly", sa.String(200)),
        sa.Column("Voltage", sa.String(50)),
        sa.Column("ShaftSize", sa.String(50)),
        sa.Column("GearboxRatio", sa.String(50)),
        sa.Column("PowerRatingHP", sa.Float()),
        sa.Column("PowerRatingKW", sa.Float()),
        sa.Column("Specifications", sa.JSON()),
        sa.Column("StockQuantity", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("PriceType", sa.String(20), nullable=False),
        sa.Column("UnitPrice", sa.Numeric(12, 2)),
        sa.Column("LeadTimeDays", sa.Integer()),
        sa.Column("IsRepairable", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("RepairPrice", sa.Numeric(12, 2)),
        sa.Column("CreatedAt", sa.DateTime(), nullable=False),
        sa.Column("UpdatedAt", sa.DateTime(), nullable=False),
        sa.CheckConstraint("PriceType IN ('fixed','non_fixed')", name="CK_Part_PriceType"),
        sa.CheckConstraint("StockQuantity >= 0", name="CK_Part_StockQuantity_0"),
    )
    op.create_index("IX_Part_Manufacturer", "Part", ["Manufacturer"], unique=False)
    op.create_index("IX_Part_UpdatedAt", "Part", ["UpdatedAt"], unique=False)

    op.create_table(
        "PartOrganizationDetail",
        sa.Column("DetailID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("PartID", sa.Integer(), sa.ForeignKey("Part.PartID"), nullable=False),
        sa.Column("OrganizationID", sa.Integer(), sa.ForeignKey("Organization.OrganizationID"), nullable=False),
        sa.Column("OrganizationItemNumber", sa.String(100)),
        sa.Column("LeadTimeDays", sa.Integer()),
        sa.Column("PriceType", sa.String(20), nullable=False),
        sa.Column("UnitPrice", sa.Numeric(12, 2)),
        sa.Column("IsRepairable", sa.Boolean(), nullable=False),
        sa.Column("RepairPrice", sa.Numeric(12, 2)),
        sa.UniqueConstraint("PartID", "OrganizationID", name="UQ_PartOrgDetail_Part_Org"),
        sa.CheckConstraint("PriceType IN ('fixed','non_fixed')", name="CK_PartOrgDetail_PriceType"),
    )
    op.create_table(
        "PartApplication",
        sa.Column("PartApplicationID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("PartID", sa.Integer(), sa.ForeignKey("Part.PartID"), nullable=False),
        sa.Column("OrganizationID", sa.Integer(), sa.ForeignKey("Organization.OrganizationID"), nullable=False),
        sa.Column("ApplicationID", sa.Integer(), sa.ForeignKey("Application.ApplicationID"), nullable=False),
        sa.UniqueConstraint("PartID", "OrganizationID", "ApplicationID", name="UQ_PartApplication"),
    )
    op.create_index("IX_PartApplication_Org_App", "PartApplication", ["OrganizationID", "ApplicationID"], unique=False)

    # Sipariş/sepet satırları (silme kontrolü için)
    op.create_table(
        "OrderItem",
        sa.Column("OrderItemID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("OrderID", sa.Integer(), nullable=False),
        sa.Column("PartID", sa.Integer(), sa.ForeignKey("Part.PartID"), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("Quantity > 0", name="CK_OrderItem_Quantity_Positive"),
    )
    op.create_index("ix_OrderItem_PartID", "OrderItem", ["PartID"], unique=False)
    op.create_table(
        "CartItem",
        sa.Column("CartItemID", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("UserID", sa.Integer(), sa.ForeignKey("AppUser.UserID"), nullable=False),
        sa.Column("PartID", sa.Integer(), sa.ForeignKey("Part.PartID"), nullable=False),
        sa.Column("Quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("Quantity > 0", name="CK_CartItem_Quantity_Positive"),
    )
    op.create_index("ix_CartItem_PartID", "CartItem", ["PartID"], unique=False)


def downgrade():
    op.drop_index("ix_CartItem_PartID", table_name="CartItem")
    op.drop_table("CartItem")
    op.drop_index("ix_OrderItem_PartID", table_name="OrderItem")
    op.drop_table("OrderItem")
    op.drop_index("IX_PartApplication_Org_App", table_name="PartApplication")
    op.drop_table("PartApplication")
    op.drop_table("PartOrganizationDetail")
    op.drop_index("IX_Part_UpdatedAt", table_name="Part")
    op.drop_index("IX_Part_Manufacturer", table_name="Part")
    op.drop_table("Part")
    op.drop_table("AppUser")
    op.drop_table("Application")
    op.drop_table("Organization")
