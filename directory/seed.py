"""Built-in institutes used when no saved directory is available."""

from directory.models import Institute

_SEED = [
    ("All India Institute of Medical Sciences (AIIMS)", "New Delhi", "DM Clinical Immunology & Rheumatology", "4"),
    ("Postgraduate Institute of Medical Education and Research (PGIMER)", "Chandigarh", "DM Clinical Immunology & Rheumatology", "4"),
    ("Sanjay Gandhi Postgraduate Institute of Medical Sciences (SGPGIMS)", "Lucknow", "DM Clinical Immunology", "4"),
    ("Jawaharlal Institute of Postgraduate Medical Education and Research (JIPMER)", "Puducherry", "DM Clinical Immunology", "3"),
    ("Christian Medical College (CMC)", "Vellore", "DM Clinical Immunology & Rheumatology", "2"),
    ("Nizam's Institute of Medical Sciences (NIMS)", "Hyderabad", "DM Rheumatology", "2"),
    ("King Edward Memorial Hospital (KEM)", "Mumbai", "DM Rheumatology", "2"),
    ("Institute of Post Graduate Medical Education & Research (IPGMER)", "Kolkata", "DM Rheumatology", "2"),
    ("Madras Medical College", "Chennai", "DM Rheumatology", "2"),
    ("Sir Ganga Ram Hospital", "New Delhi", "DrNB Rheumatology", "2"),
    ("Amrita Institute of Medical Sciences", "Kochi", "DM Rheumatology", "2"),
    ("Kasturba Medical College", "Manipal", "DM Clinical Immunology & Rheumatology", "1"),
]

INITIAL_INSTITUTES: list[Institute] = [
    Institute(id=i, name=name, city=city, course=course, seats=seats)
    for i, (name, city, course, seats) in enumerate(_SEED, start=1)
]
