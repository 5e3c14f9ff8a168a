"""
Static reference tables used by the specialist functions.

Keys are lower-case lookup names; functions match user input case-insensitively.
"""

PHYSICS_CONSTANTS: dict[str, dict[str, str]] = {
    "speed of light": {"symbol": "c", "value": "299792458", "unit": "m/s", "description": "Speed of light in vacuum"},
    "planck constant": {"symbol": "h", "value": "6.62607015 × 10⁻³⁴", "unit": "J⋅s", "description": "Planck's constant"},
    "gravitational constant": {"symbol": "G", "value": "6.67430 × 10⁻¹¹", "unit": "m³⋅kg⁻¹⋅s⁻²", "description": "Gravitational constant"},
    "electron mass": {"symbol": "mₑ", "value": "9.1093837 × 10⁻³¹", "unit": "kg", "description": "Rest mass of electron"},
    "avogadro number": {"symbol": "Nₐ", "value": "6.02214076 × 10²³", "unit": "mol⁻¹", "description": "Avogadro's number"},
    "boltzmann constant": {"symbol": "k", "value": "1.380649 × 10⁻²³", "unit": "J/K", "description": "Boltzmann constant"},
    "elementary charge": {"symbol": "e", "value": "1.602176634 × 10⁻¹⁹", "unit": "C", "description": "Elementary electric charge"},
}

CHEMICAL_ELEMENTS: dict[str, dict] = {
    "hydrogen": {"symbol": "H", "atomic_number": 1, "atomic_mass": "1.008", "description": "Lightest chemical element"},
    "helium": {"symbol": "He", "atomic_number": 2, "atomic_mass": "4.003", "description": "Noble gas, second lightest element"},
    "carbon": {"symbol": "C", "atomic_number": 6, "atomic_mass": "12.011", "description": "Basis of organic chemistry"},
    "nitrogen": {"symbol": "N", "atomic_number": 7, "atomic_mass": "14.007", "description": "Makes up 78% of Earth's atmosphere"},
    "oxygen": {"symbol": "O", "atomic_number": 8, "atomic_mass": "15.999", "description": "Essential for respiration"},
    "sodium": {"symbol": "Na", "atomic_number": 11, "atomic_mass": "22.990", "description": "Alkali metal, essential for life"},
    "chlorine": {"symbol": "Cl", "atomic_number": 17, "atomic_mass": "35.453", "description": "Halogen gas, used in disinfection"},
    "iron": {"symbol": "Fe", "atomic_number": 26, "atomic_mass": "55.845", "description": "Essential for blood and steel production"},
    "copper": {"symbol": "Cu", "atomic_number": 29, "atomic_mass": "63.546", "description": "Excellent conductor of electricity"},
    "gold": {"symbol": "Au", "atomic_number": 79, "atomic_mass": "196.967", "description": "Precious metal, chemically inert"},
}

# Atomic masses (g/mol) for the molar-mass calculator
ATOMIC_MASSES: dict[str, float] = {
    "H": 1.008,
    "He": 4.003,
    "C": 12.011,
    "N": 14.007,
    "O": 15.999,
    "Na": 22.990,
    "Cl": 35.453,
    "Fe": 55.845,
    "Cu": 63.546,
    "Au": 196.967,
    "S": 32.06,
    "P": 30.974,
    "K": 39.098,
    "Ca": 40.078,
    "Mg": 24.305,
}

HISTORICAL_EVENTS: dict[str, dict[str, str]] = {
    "world war 2": {"year": "1939-1945", "description": "Global war involving most nations", "significance": "Reshaped global politics and led to decolonization"},
    "world war 1": {"year": "1914-1918", "description": "The Great War, first global conflict", "significance": "Led to fall of empires and rise of new nations"},
    "moon landing": {"year": "1969", "description": "Apollo 11 first crewed moon landing", "significance": "Demonstrated human capability for space exploration"},
    "fall of berlin wall": {"year": "1989", "description": "End of divided Berlin", "significance": "Symbolized end of Cold War"},
    "renaissance": {"year": "14th-17th century", "description": "Cultural rebirth in Europe", "significance": "Revival of art, science, and learning"},
    "industrial revolution": {"year": "1760-1840", "description": "Mechanization of production", "significance": "Transformed society from agricultural to industrial"},
    "french revolution": {"year": "1789-1799", "description": "Overthrow of French monarchy", "significance": "Spread democratic ideals across Europe"},
    "american revolution": {"year": "1775-1783", "description": "American colonies gained independence", "significance": "Established first modern democratic republic"},
}

POETRY_DEVICES: dict[str, str] = {
    "metaphor": "A direct comparison between two unlike things without using 'like' or 'as'",
    "simile": "A comparison using 'like' or 'as'",
    "alliteration": "Repetition of initial consonant sounds",
    "personification": "Giving human characteristics to non-human things",
}

NARRATIVE_ELEMENTS: dict[str, str] = {
    "plot": "The sequence of events in a story (exposition, rising action, climax, falling action, resolution)",
    "character": "The people or beings who take part in the story's action",
    "setting": "The time and place where the story occurs",
    "theme": "The central message or underlying meaning of the story",
}

ALGORITHMS: dict[str, str] = {
    "bubble sort": "Time: O(n²), Space: O(1). Repeatedly steps through list, compares adjacent elements and swaps them if wrong order.",
    "binary search": "Time: O(log n), Space: O(1). Searches sorted array by repeatedly dividing search interval in half.",
    "quick sort": "Time: O(n log n) average, Space: O(log n). Divide-and-conquer algorithm using pivot element.",
    "merge sort": "Time: O(n log n), Space: O(n). Divide-and-conquer algorithm that divides array and merges sorted halves.",
}

NUTRIENTS: dict[str, str] = {
    "protein": "Builds and repairs tissues, makes enzymes and hormones. Sources: meat, fish, eggs, beans.",
    "carbohydrates": "Primary energy source for the body. Sources: grains, fruits, vegetables.",
    "fats": "Energy storage, insulation, vitamin absorption. Sources: oils, nuts, avocados.",
    "vitamins": "Organic compounds essential for normal growth and development.",
    "minerals": "Inorganic substances needed for bone health, nerve function, etc.",
}

CELL_DIVISION: dict[str, str] = {
    "mitosis": "Mitosis: Cell division producing two identical diploid cells. Phases: Prophase, Metaphase, Anaphase, Telophase. Used for growth and repair.",
    "meiosis": "Meiosis: Cell division producing four genetically different haploid gametes. Two divisions (I & II). Used for sexual reproduction.",
}
