"""
Built-in catalogue inserted the first time an empty catalogue is read.
"""

from typing import Dict, List

from models.medication import CatalogueCategory as C, CatalogueForm as F

# (name, generic name, category, form, strength, notes)
BUILTIN_MEDICATIONS = [
    ("氨氯地平", "Amlodipine", C.HYPERTENSION, F.TABLET, "5 mg", "常用降压药"),
    ("缬沙坦", "Valsartan", C.HYPERTENSION, F.TABLET, "80 mg", "ARB 类降压药"),
    ("硝苯地平控释片", "Nifedipine", C.HYPERTENSION, F.TABLET, "30 mg", "钙通道阻滞剂，整片吞服"),
    ("阿司匹林肠溶片", "Aspirin", C.CARDIOVASCULAR, F.TABLET, "100 mg", "心梗、脑梗二级预防常用药"),
    ("他汀类降脂药", "Atorvastatin", C.CARDIOVASCULAR, F.TABLET, "10 mg", "降脂常用药"),
    ("氯吡格雷", "Clopidogrel", C.CARDIOVASCULAR, F.TABLET, "75 mg", "抗血小板聚集"),
    ("二甲双胍", "Metformin", C.DIABETES, F.TABLET, "500 mg", "2 型糖尿病基础用药"),
    ("格列美脲", "Glimepiride", C.DIABETES, F.TABLET, "1 mg", "磺脲类降糖药"),
    ("胰岛素", "Insulin", C.DIABETES, F.INJECTION, "", "按医嘱调整剂量"),
    ("对乙酰氨基酚", "Acetaminophen", C.COLD_FEVER, F.TABLET, "500 mg", "解热镇痛常用药"),
    ("布洛芬", "Ibuprofen", C.COLD_FEVER, F.TABLET, "200 mg", "解热镇痛、抗炎"),
    ("复方感冒药", "", C.COLD_FEVER, F.TABLET, "", "多成分复方制剂"),
    ("奥美拉唑", "Omeprazole", C.DIGESTIVE, F.CAPSULE, "20 mg", "胃酸相关疾病常用药"),
    ("蒙脱石散", "Montmorillonite", C.DIGESTIVE, F.GRANULE, "3 g", "止泻，与其他药物间隔服用"),
    ("沙丁胺醇气雾剂", "Salbutamol", C.RESPIRATORY, F.INHALER, "100 μg/喷", "缓解支气管痉挛"),
    ("氨溴索口服液", "Ambroxol", C.RESPIRATORY, F.ORAL_LIQUID, "15 mg/5 ml", "化痰"),
    ("氯雷他定", "Loratadine", C.ALLERGY, F.TABLET, "10 mg", "抗过敏，嗜睡较少"),
    ("西替利嗪", "Cetirizine", C.ALLERGY, F.TABLET, "10 mg", "抗过敏"),
    ("维生素 D", "Cholecalciferol", C.SUPPLEMENT, F.CAPSULE, "400 IU", "补充维生素 D"),
    ("碳酸钙", "Calcium Carbonate", C.SUPPLEMENT, F.TABLET, "600 mg", "补钙，随餐服用"),
]


def builtin_rows() -> List[Dict]:
    """Seed entries as column dicts ready for insertion."""
    return [
        {
            "name": name,
            "generic_name": generic_name,
            "category": category.value,
            "form": form.value,
            "strength": strength,
            "notes": notes,
            "is_builtin": True,
            "is_favorite": False,
        }
        for name, generic_name, category, form, strength, notes in BUILTIN_MEDICATIONS
    ]
