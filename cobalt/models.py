from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    true
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class MsdsItem(Base):
    __tablename__ = "msds_items"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    usage = Column(String, nullable=False, server_default="")
    description = Column(Text, nullable=False, server_default="")
    msds_no = Column(String, nullable=False, server_default="")

    pdf_file_name = Column(String, nullable=False, server_default="")
    pdf_file_url = Column(String, nullable=False, server_default="")
    warning_label_pdf_url = Column(String, nullable=False, server_default="")
    warning_label_pdf_name = Column(String, nullable=False, server_default="")
    management_guidelines_pdf_url = Column(String, nullable=False, server_default="")
    management_guidelines_pdf_name = Column(String, nullable=False, server_default="")
    qr_code = Column(String, nullable=False, server_default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class WarningSymbol(Base):
    __tablename__ = "warning_symbols"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, server_default="")
    image_url = Column(String, nullable=False, server_default="/placeholder.svg")
    category = Column(String, nullable=False, server_default="physical")
    is_active = Column(Boolean, nullable=False, server_default=true())


class ProtectiveEquipment(Base):
    __tablename__ = "protective_equipment"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, server_default="")
    image_url = Column(String, nullable=False, server_default="/placeholder.svg")
    category = Column(String, nullable=False, server_default="respiratory")
    is_active = Column(Boolean, nullable=False, server_default=true())


class ConfigOption(Base):
    __tablename__ = "config_options"
    __table_args__ = (
        UniqueConstraint("type", "value"),
    )

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    value = Column(String, nullable=False)
    label = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, server_default=true())


class MsdsWarningSymbol(Base):
    __tablename__ = "msds_warning_symbols"
    __table_args__ = (
        UniqueConstraint("msds_id", "warning_symbol_id"),
    )

    id = Column(Integer, primary_key=True)
    msds_id = Column(Integer, ForeignKey("msds_items.id", ondelete="CASCADE"), nullable=False)
    # Spreadsheet imports store raw GHS codes, so this is not a foreign key
    warning_symbol_id = Column(String, nullable=False)


class MsdsProtectiveEquipment(Base):
    __tablename__ = "msds_protective_equipment"
    __table_args__ = (
        UniqueConstraint("msds_id", "protective_equipment_id"),
    )

    id = Column(Integer, primary_key=True)
    msds_id = Column(Integer, ForeignKey("msds_items.id", ondelete="CASCADE"), nullable=False)
    protective_equipment_id = Column(String, nullable=False)


class MsdsConfigItem(Base):
    __tablename__ = "msds_config_items"
    __table_args__ = (
        UniqueConstraint("msds_id", "config_type", "config_value"),
    )

    id = Column(Integer, primary_key=True)
    msds_id = Column(Integer, ForeignKey("msds_items.id", ondelete="CASCADE"), nullable=False)
    config_type = Column(String, nullable=False)
    config_value = Column(String, nullable=False)
