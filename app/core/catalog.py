"""Static clinic catalog: surgeries, staff, clinics and bank cards."""
from typing import List, Optional

from app.models.catalog import Surgery, Doctor, Consultant, Clinic, BankCard


SURGERIES: List[Surgery] = [
    Surgery(id="1", name="بلفارو پلک بالا", price=16000000),
    Surgery(id="2", name="بلفارو پلک پایین", price=16000000),
    Surgery(id="3", name="پلک پایین و رفع چروک زیر چشم", price=23000000),
    Surgery(id="4", name="بلفارو پلک پایین بدون بخیه", price=23000000),
    Surgery(id="5", name="تزریق چربی صورت", price=15000000),
    Surgery(id="6", name="ساکشن غبغب", price=19000000),
    Surgery(id="7", name="سانترال لب", price=16000000),
    Surgery(id="8", name="دایرکت ابرو (لیفت ابرو)", price=23000000),
    Surgery(id="9", name="لیفت تحتانی", price=23000000),
    Surgery(id="10", name="شقیقه", price=60000000, requires_hospital=True),
    Surgery(id="11", name="گونه", price=60000000, requires_hospital=True),
    Surgery(id="12", name="گونه و شقیقه همزمان", price=70000000, requires_hospital=True),
    Surgery(id="13", name="مینی لیفت پایین صورت", price=75000000, requires_hospital=True),
]

DOCTORS: List[Doctor] = [
    Doctor(id="1", name="دکتر مریم نادی"),
    Doctor(id="2", name="دکتر علی قادری"),
    Doctor(id="3", name="دکتر فروزان رحیمی"),
]

CONSULTANTS: List[Consultant] = [
    Consultant(id="1", name="خانم ساعی"),
    Consultant(id="2", name="خانم افتخاری"),
    Consultant(id="3", name="خانم الیاسی"),
    Consultant(id="4", name="خانم حضرتی"),
]

CLINICS: List[Clinic] = [
    Clinic(id="1", name="مطب نیکان", max_capacity=35),
    Clinic(id="2", name="مطب میرداماد", max_capacity=35),
]

BANK_CARDS: List[BankCard] = [
    BankCard(id="1", masked_number="6104 **** **** 1450", owner_name="نگار سعیدی", bank_name="ملت"),
    BankCard(id="2", masked_number="5047 **** **** 4118", owner_name="نگار سعیدی", bank_name="شهر"),
    BankCard(id="3", masked_number="5894 **** **** 3810", owner_name="نگار سعیدی", bank_name="رفاه"),
    BankCard(id="4", masked_number="6219 **** **** 7989", owner_name="محمد مظاهری", bank_name="بلوبانک"),
    BankCard(id="5", masked_number="6362 **** **** 5964", owner_name="محمد مظاهری", bank_name="آینده"),
    BankCard(id="6", masked_number="6362 **** **** 6390", owner_name="محمد مظاهری", bank_name="آینده"),
    BankCard(id="7", masked_number="6037 **** **** 2326", owner_name="محمد مظاهری", bank_name="کشاورزی"),
    BankCard(id="8", masked_number="6037 **** **** 0136", owner_name="سعید مظاهری", bank_name="صادرات"),
    BankCard(id="9", masked_number="6037 **** **** 3175", owner_name="سعید مظاهری", bank_name="کشاورزی"),
    BankCard(id="10", masked_number="5859 **** **** 0191", owner_name="سعید مظاهری", bank_name="تجارت"),
    BankCard(id="11", masked_number="6037 **** **** 2082", owner_name="سعید مظاهری", bank_name="ملی"),
    BankCard(id="12", masked_number="6037 **** **** 8661", owner_name="نرجس حجتی‌پور", bank_name="صادرات"),
    BankCard(id="13", masked_number="5029 **** **** 7199", owner_name="نیلوفر سعیدی‌پور", bank_name="دی"),
    BankCard(id="14", masked_number="6221 **** **** 2780", owner_name="نیلوفر سعیدی‌پور", bank_name="پارسیان"),
    BankCard(id="15", masked_number="6104 **** **** 6344", owner_name="محمد مظاهری", bank_name="ملت"),
    BankCard(id="16", masked_number="6037 **** **** 1355", owner_name="محمد مظاهری", bank_name="کشاورزی"),
    BankCard(id="17", masked_number="6362 **** **** 0712", owner_name="نگار سعیدی", bank_name="آینده"),
    BankCard(id="18", masked_number="6280 **** **** 0783", owner_name="نگار سعیدی", bank_name="مسکن"),
    BankCard(id="19", masked_number="5022 **** **** 9651", owner_name="نگار سعیدی", bank_name="پاسارگاد"),
    BankCard(id="20", masked_number="5041 **** **** 9216", owner_name="نگین سعیدی"),
    BankCard(id="21", masked_number="6104 **** **** 7162", owner_name="نیلوفر سعیدی‌پور", bank_name="ملت"),
    BankCard(id="22", masked_number="6219 **** **** 2910", owner_name="نگار سعیدی", bank_name="بلوبانک"),
    BankCard(id="23", masked_number="6037 **** **** 6074", owner_name="سپیده فروغی", bank_name="ملی"),
    BankCard(id="24", masked_number="5047 **** **** 1785", owner_name="فروزان رحیمی", bank_name="شهر"),
    BankCard(id="25", masked_number="5029 **** **** 4941", owner_name="مریم نادی", bank_name="دی"),
    BankCard(id="26", masked_number="6104 **** **** 4331", owner_name="علی قادری", bank_name="ملت"),
    BankCard(id="27", masked_number="5859 **** **** 3319", owner_name="علی قادری", bank_name="تجارت"),
    BankCard(id="28", masked_number="5041 **** **** 5224", owner_name="هادی رباط"),
    BankCard(id="29", masked_number="6219 **** **** 5687", owner_name="حمیدرضا بخشی"),
    BankCard(id="30", masked_number="5894 **** **** 7958", owner_name="عیسی بخشی"),
    BankCard(id="31", masked_number="5047 **** **** 4222", owner_name="مهران چشمه"),
    BankCard(id="32", masked_number="5047 **** **** 2546", owner_name="نوید نظری"),
    BankCard(id="33", masked_number="6037 **** **** 5527", owner_name="وحید پرحقی"),
    BankCard(id="34", masked_number="5022 **** **** 2405", owner_name="نرگس شیرزاد", bank_name="پاسارگاد"),
    BankCard(id="35", masked_number="6037 **** **** 0361", owner_name="الهه میرزایی"),
    BankCard(id="36", masked_number="6104 **** **** 1966", owner_name="یوسف هنرمند", bank_name="ملت"),
    BankCard(id="37", masked_number="6037 **** **** 6932", owner_name="دیانا افتخاری"),
]


def _find(items, item_id: str):
    return next((item for item in items if item.id == item_id), None)


def get_surgery(surgery_id: str) -> Optional[Surgery]:
    return _find(SURGERIES, surgery_id)


def get_doctor(doctor_id: str) -> Optional[Doctor]:
    return _find(DOCTORS, doctor_id)


def get_consultant(consultant_id: str) -> Optional[Consultant]:
    return _find(CONSULTANTS, consultant_id)


def get_clinic(clinic_id: str) -> Optional[Clinic]:
    return _find(CLINICS, clinic_id)


def get_card(card_id: str) -> Optional[BankCard]:
    return _find(BANK_CARDS, card_id)
