from .medicine import MedicineSearchQuerySerializer, MedicineSerializer

__all__ = ["MedicineSerializer", "MedicineSearchQuerySerializer"]
