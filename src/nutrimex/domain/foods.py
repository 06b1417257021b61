"""Food composition domain models."""

from dataclasses import dataclass

# Remote field name -> UI field name, in display order.
NUTRIENT_FIELDS: dict[str, str] = {
    "energ_kcal": "energ_kcal",
    "carbohydrt": "carbohidratos_g",
    "lipid_tot": "lipid_tot_g",
    "protein": "protein_g",
    "fiber_td": "fiber_td_g",
    "calcium": "calcium_mg",
    "iron": "iron_mg",
    "ironhem": "ironhem_mg",
    "ironnohem": "ironnohem_mg",
    "zinc": "zinc_mg",
    "vit_c": "vit_c_mg",
    "thiamin": "thiamin_mg",
    "riboflavin": "riboflavin_mg",
    "niacin": "niacin_mg",
    "panto_acid": "panto_acid_mg",
    "vit_b6": "vit_b6_mg",
    "folic_acid": "folic_acid_mcg",
    "food_folate": "food_folate_mcg",
    "folate_dfe": "folate_dfe_mcg",
    "vit_b12": "vit_b12_mcg",
    "vit_a_rae": "vit_a_rae_mcg",
    "vit_e": "vit_e_mg",
    "vit_d_iu": "vit_d_iu",
    "vit_k": "vit_k_mcg",
    "fa_sat": "fa_sat_g",
    "fa_mono": "fa_mono_g",
    "fa_poly": "fa_poly_g",
    "chole": "chole_mg",
}


@dataclass(frozen=True)
class Food:
    """Normalized food record consumed by every page.

    Nutrient amounts are per 100 g and always present; missing values from the
    service are stored as zero.
    """

    codigomex2: int
    nombre: str
    energ_kcal: float = 0.0
    carbohidratos_g: float = 0.0
    lipid_tot_g: float = 0.0
    protein_g: float = 0.0
    fiber_td_g: float = 0.0
    calcium_mg: float = 0.0
    iron_mg: float = 0.0
    ironhem_mg: float = 0.0
    ironnohem_mg: float = 0.0
    zinc_mg: float = 0.0
    vit_c_mg: float = 0.0
    thiamin_mg: float = 0.0
    riboflavin_mg: float = 0.0
    niacin_mg: float = 0.0
    panto_acid_mg: float = 0.0
    vit_b6_mg: float = 0.0
    folic_acid_mcg: float = 0.0
    food_folate_mcg: float = 0.0
    folate_dfe_mcg: float = 0.0
    vit_b12_mcg: float = 0.0
    vit_a_rae_mcg: float = 0.0
    vit_e_mg: float = 0.0
    vit_d_iu: float = 0.0
    vit_k_mcg: float = 0.0
    fa_sat_g: float = 0.0
    fa_mono_g: float = 0.0
    fa_poly_g: float = 0.0
    chole_mg: float = 0.0
