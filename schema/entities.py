"""
schema.entities - Built-in import configs for employees, clients and sites.

Column headers are the ones printed on the downloadable templates;
field paths address the stored documents.
"""

from __future__ import annotations

from import_engine.field_map import FieldMapping as F, ImportConfig
from import_engine.field_types import FieldType as T


EMPLOYEE = ImportConfig(
    entity_name="社員",
    collection="employees",
    identifier_field="employeeCode",
    identifier_column="社員番号",
    field_mappings=(
        # 基本情報
        F("社員番号", "employeeCode"),
        F("氏", "lastName", required=True),
        F("名", "firstName", required=True),
        F("氏（ひらがな）", "lastNameKana"),
        F("名（ひらがな）", "firstNameKana"),
        F("生年月日", "birthDate", T.DATE),
        F("性別", "gender", T.ENUM, options=("男性", "女性")),
        F("血液型", "bloodType", T.ENUM, options=("A", "B", "O", "AB")),
        # address
        F("郵便番号", "address.postalCode"),
        F("都道府県", "address.prefecture"),
        F("市区町村", "address.city"),
        F("番地", "address.address"),
        F("建物名", "address.building"),
        # contact
        F("携帯電話", "contact.mobile"),
        F("その他電話", "contact.other"),
        F("メールアドレス", "contact.email", T.EMAIL),
        # employment
        F("雇用形態", "employment.type", T.ENUM,
          options=("正社員", "契約社員", "パート", "アルバイト")),
        F("入社日", "employment.hireDate", T.DATE),
        F("退職日", "employment.resignationDate", T.DATE),
        F("経験年数開始年", "employment.experienceStartYear", T.NUMBER),
        F("任務", "employment.role"),
        F("職長", "employment.isForeman", T.BOOLEAN),
        # salary
        F("基本給", "salary.baseSalary", T.NUMBER),
        F("住宅手当", "salary.housingAllowance", T.NUMBER),
        F("職長手当", "salary.foremanAllowance", T.NUMBER),
        F("通勤手当", "salary.commuteAllowance", T.NUMBER),
        F("その他手当", "salary.otherAllowance", T.NUMBER),
        # insurance
        F("社会保険番号", "insurance.socialInsuranceNumber"),
        F("年金番号", "insurance.pensionNumber"),
        F("雇用保険番号", "insurance.employmentInsuranceNumber"),
        # bankInfo
        F("銀行名", "bankInfo.bankName"),
        F("支店名", "bankInfo.branchName"),
        F("口座種別", "bankInfo.accountType", T.ENUM, options=("普通", "当座")),
        F("口座番号", "bankInfo.accountNumber"),
        F("口座名義", "bankInfo.accountHolder"),
        # comma-separated lists
        F("資格", "qualifications", T.ARRAY),
        F("免許", "licenses", T.ARRAY),
        F("在籍状況", "isActive", T.BOOLEAN),
    ),
    sample_data={
        "社員番号": "EMP001",
        "氏": "山田",
        "名": "太郎",
        "氏（ひらがな）": "やまだ",
        "名（ひらがな）": "たろう",
        "生年月日": "1990-01-15",
        "性別": "男性",
        "血液型": "A",
        "郵便番号": "123-4567",
        "都道府県": "東京都",
        "市区町村": "渋谷区",
        "番地": "1-2-3",
        "建物名": "サンプルビル101",
        "携帯電話": "090-1234-5678",
        "メールアドレス": "yamada@example.com",
        "雇用形態": "正社員",
        "入社日": "2020-04-01",
        "経験年数開始年": "2015",
        "任務": "現場作業員",
        "職長": "false",
        "基本給": "250000",
        "住宅手当": "20000",
        "通勤手当": "15000",
        "銀行名": "サンプル銀行",
        "支店名": "渋谷支店",
        "口座種別": "普通",
        "口座番号": "1234567",
        "口座名義": "ヤマダ タロウ",
        "資格": "足場組立,玉掛け",
        "免許": "普通自動車,フォークリフト",
        "在籍状況": "true",
    },
)


CLIENT = ImportConfig(
    entity_name="取引先",
    collection="clients",
    identifier_field="clientCode",
    identifier_column="取引先コード",
    field_mappings=(
        F("取引先コード", "clientCode"),
        F("取引先名", "clientName", required=True),
        F("郵便番号", "postalCode"),
        F("都道府県", "prefecture"),
        F("市区町村", "city"),
        F("番地", "address"),
        F("建物名", "building"),
        F("電話番号", "tel"),
        F("FAX", "fax"),
        F("メールアドレス", "email", T.EMAIL),
        F("担当者名", "managerName"),
    ),
    sample_data={
        "取引先コード": "CLT001",
        "取引先名": "株式会社サンプル建設",
        "郵便番号": "100-0001",
        "都道府県": "東京都",
        "市区町村": "千代田区",
        "番地": "1-1-1",
        "建物名": "サンプルタワー10F",
        "電話番号": "03-1234-5678",
        "FAX": "03-1234-5679",
        "メールアドレス": "info@sample.co.jp",
        "担当者名": "佐藤 次郎",
    },
)


SITE = ImportConfig(
    entity_name="現場",
    collection="sites",
    identifier_field="siteCode",
    identifier_column="現場コード",
    field_mappings=(
        F("現場コード", "siteCode"),
        F("現場名", "siteName", required=True),
        F("取引先コード", "clientCode"),
        F("取引先名", "clientName"),
        F("住所", "address"),
        F("開始日", "startDate", T.DATE),
        F("終了日", "endDate", T.DATE),
        F("ステータス", "status", T.ENUM, options=("pending", "active", "completed")),
    ),
    sample_data={
        "現場コード": "SITE001",
        "現場名": "サンプルビル新築工事",
        "取引先コード": "CLT001",
        "取引先名": "株式会社サンプル建設",
        "住所": "東京都新宿区西新宿2-8-1",
        "開始日": "2025-01-15",
        "終了日": "2025-06-30",
        "ステータス": "active",
    },
    resolve_client_reference=True,
)


BUILTIN = {
    "employee": EMPLOYEE,
    "client": CLIENT,
    "site": SITE,
}
