from customer_match.datasets.reference import INTAKE_COLUMNS, ReferenceDatasetGenerator

__all__ = ["INTAKE_COLUMNS", "ReferenceDatasetGenerator"]
