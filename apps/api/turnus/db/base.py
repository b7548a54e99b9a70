# apps/api/turnus/db/base.py
from sqlalchemy.orm import declarative_base

# Model base class (tüm modeller buradan extend eder)
Base = declarative_base()
