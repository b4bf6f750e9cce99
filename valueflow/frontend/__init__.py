"""Front ends translating parser output into ValueFlow syntax trees"""
