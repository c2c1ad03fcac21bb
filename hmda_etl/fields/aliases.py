"""Alias tables mapping source column spellings onto canonical HMDA field names."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from hmda_etl.models.canonical import HMDA_COLUMN_ORDER

# Resolvable fields that feed derivations and merging but are not output columns.
HELPER_FIELDS: tuple[str, ...] = ("ApplNumb", "BorrowerFullName", "RateType", "LoanProgram")

_LONG_FORM_FIELD_MAP: dict[str, str] = {
    # Core Identifiers
    "Legal Entity Identifier (LEI)": "LEI",
    "Legal Entity Identifier": "LEI",
    "Universal Loan Identifier (ULI)": "ULI",
    "Universal Loan Identifier": "ULI",
    "Loan ID": "ApplNumb",
    "Loan Number": "ApplNumb",
    "Application Number": "ApplNumb",

    # Dates
    "Application Date": "ApplDate",
    "Action Taken Date": "ActionDate",
    "Action Date": "ActionDate",
    "Rate Lock Date": "Rate_Lock_Date",
    "Lock Date": "Rate_Lock_Date",

    # Loan Details
    "Loan Type": "LoanType",
    "Loan Purpose": "Purpose",
    "Loan Amount": "LoanAmountInDollars",
    "Loan Amount in Dollars": "LoanAmountInDollars",
    "Construction Method": "ConstructionMethod",
    "Occupancy Type": "OccupancyType",
    "Occupancy": "OccupancyType",
    "Preapproval": "Preapproval",
    "Pre-approval": "Preapproval",
    "Action Taken": "Action",
    "Action": "Action",

    # Property Info
    "Street Address": "Address",
    "Property Street": "Address",
    "Property Address": "Address",
    "Property City": "City",
    "Property State": "State_abrv",
    "State": "State_abrv",
    "Property ZIP Code": "Zip",
    "ZIP Code": "Zip",
    "Zip Code": "Zip",
    "County": "County_5",
    "County Code": "County_5",
    "Census Tract": "Tract_11",
    "Tract": "Tract_11",
    "CensusTract": "Tract_11",
    "Census_Tract": "Tract_11",
    "FFIEC Census Tract": "Tract_11",
    "Tract Number": "Tract_11",
    "Census Tract Number": "Tract_11",
    "TRACT": "Tract_11",

    # Borrower Demographics - Primary Applicant Ethnicity
    "Applicant Ethnicity 1": "Ethnicity_1",
    "Applicant Ethnicity-1": "Ethnicity_1",
    "Ethnicity of Applicant or Borrower: 1": "Ethnicity_1",
    "Applicant Ethnicity 2": "Ethnicity_2",
    "Ethnicity of Applicant or Borrower: 2": "Ethnicity_2",
    "Applicant Ethnicity 3": "Ethnicity_3",
    "Ethnicity of Applicant or Borrower: 3": "Ethnicity_3",
    "Applicant Ethnicity 4": "Ethnicity_4",
    "Ethnicity of Applicant or Borrower: 4": "Ethnicity_4",
    "Applicant Ethnicity 5": "Ethnicity_5",
    "Ethnicity of Applicant or Borrower: 5": "Ethnicity_5",
    "Applicant Ethnicity: Free Form Text Field": "EthnicityOther",
    "Ethnicity of Applicant or Borrower: Conditional Free Form Text Field for Code 14": "EthnicityOther",
    "Ethnicity of Applicant or Borrower Collected on the Basis of Visual Observation or Surname": "Ethnicity_Determinant",
    "Applicant Ethnicity Basis": "Ethnicity_Determinant",

    # Borrower Demographics - Co-Applicant Ethnicity
    "Co-Applicant Ethnicity 1": "Coa_Ethnicity_1",
    "Co-Applicant Ethnicity-1": "Coa_Ethnicity_1",
    "Ethnicity of Co-Applicant or Co-Borrower: 1": "Coa_Ethnicity_1",
    "Ethnicity of Co-Applicant or CoBorrower: 1": "Coa_Ethnicity_1",
    "Co-Applicant Ethnicity 2": "Coa_Ethnicity_2",
    "Ethnicity of Co-Applicant or Co-Borrower: 2": "Coa_Ethnicity_2",
    "Ethnicity of Co-Applicant or CoBorrower: 2": "Coa_Ethnicity_2",
    "Co-Applicant Ethnicity 3": "Coa_Ethnicity_3",
    "Ethnicity of Co-Applicant or Co-Borrower: 3": "Coa_Ethnicity_3",
    "Ethnicity of Co-Applicant or CoBorrower: 3": "Coa_Ethnicity_3",
    "Co-Applicant Ethnicity 4": "Coa_Ethnicity_4",
    "Ethnicity of Co-Applicant or Co-Borrower: 4": "Coa_Ethnicity_4",
    "Ethnicity of Co-Applicant or CoBorrower: 4": "Coa_Ethnicity_4",
    "Co-Applicant Ethnicity 5": "Coa_Ethnicity_5",
    "Ethnicity of Co-Applicant or Co-Borrower: 5": "Coa_Ethnicity_5",
    "Ethnicity of Co-Applicant or CoBorrower: 5": "Coa_Ethnicity_5",
    "Co-Applicant Ethnicity: Free Form Text Field": "Coa_EthnicityOther",
    "Ethnicity of Co-Applicant or CoBorrower: Conditional Free Form Text Field for Code 14": "Coa_EthnicityOther",
    "Ethnicity of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname": "Coa_Ethnicity_Determinant",
    "Ethnicity of Co-Applicant or CoBorrower Collected on the Basis of Visual Observation or Surname": "Coa_Ethnicity_Determinant",
    "Co-Applicant Ethnicity Basis": "Coa_Ethnicity_Determinant",

    # Borrower Demographics - Race Primary
    "Applicant Race 1": "Race_1",
    "Applicant Race-1": "Race_1",
    "Race of Applicant or Borrower: 1": "Race_1",
    "Applicant Race 2": "Race_2",
    "Race of Applicant or Borrower: 2": "Race_2",
    "Applicant Race 3": "Race_3",
    "Race of Applicant or Borrower: 3": "Race_3",
    "Applicant Race 4": "Race_4",
    "Race of Applicant or Borrower: 4": "Race_4",
    "Applicant Race 5": "Race_5",
    "Race of Applicant or Borrower: 5": "Race_5",
    "Applicant Race: Free Form Text Field for American Indian or Alaska Native Enrolled or Principal Tribe": "Race1_Other",
    "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 1": "Race1_Other",
    "Applicant Race: Free Form Text Field for Other Asian": "Race27_Other",
    "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 27": "Race27_Other",
    "Applicant Race: Free Form Text Field for Other Pacific Islander": "Race44_Other",
    "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 44": "Race44_Other",
    "Race of Applicant or Borrower Collected on the Basis of Visual Observation or Surname": "Race_Determinant",
    "Applicant Race Basis": "Race_Determinant",

    # Borrower Demographics - Race Co-Applicant
    "Co-Applicant Race 1": "CoaRace_1",
    "Co-Applicant Race-1": "CoaRace_1",
    "Race of Co-Applicant or Co-Borrower: 1": "CoaRace_1",
    "Race of CoApplicant or Co-Borrower: 1": "CoaRace_1",
    "Co-Applicant Race 2": "CoaRace_2",
    "Race of Co-Applicant or Co-Borrower: 2": "CoaRace_2",
    "Race of CoApplicant or Co-Borrower: 2": "CoaRace_2",
    "Co-Applicant Race 3": "CoaRace_3",
    "Race of Co-Applicant or Co-Borrower: 3": "CoaRace_3",
    "Race of CoApplicant or Co-Borrower: 3": "CoaRace_3",
    "Co-Applicant Race 4": "CoaRace_4",
    "Race of Co-Applicant or Co-Borrower: 4": "CoaRace_4",
    "Race of CoApplicant or Co-Borrower: 4": "CoaRace_4",
    "Co-Applicant Race 5": "CoaRace_5",
    "Race of Co-Applicant or Co-Borrower: 5": "CoaRace_5",
    "Race of CoApplicant or Co-Borrower: 5": "CoaRace_5",
    "Co-Applicant Race: Free Form Text Field for American Indian or Alaska Native": "CoaRace1_Other",
    "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 1": "CoaRace1_Other",
    "Co-Applicant Race: Free Form Text Field for Other Asian": "CoaRace27_Other",
    "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 27": "CoaRace27_Other",
    "Co-Applicant Race: Free Form Text Field for Other Pacific Islander": "CoaRace44_Other",
    "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 44": "CoaRace44_Other",
    "Race of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname": "CoaRace_Determinant",
    "Race of CoApplicant or Co-Borrower Collected on the Basis of Visual Observation or Surname": "CoaRace_Determinant",
    "Co-Applicant Race Basis": "CoaRace_Determinant",

    # Sex/Gender
    "Sex of Applicant or Borrower": "Sex",
    "Applicant Sex": "Sex",
    "Sex of Co-Applicant or Co-Borrower": "CoaSex",
    "Sex of CoApplicant or Co-Borrower": "CoaSex",
    "Co-Applicant Sex": "CoaSex",
    "Sex of Applicant or Borrower Collected on the Basis of Visual Observation or Surname": "Sex_Determinant",
    "Applicant Sex Basis": "Sex_Determinant",
    "Sex of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname": "CoaSex_Determinant",
    "Sex of CoApplicant or Co-Borrower Collected on the Basis of Visual Observation or Surname": "CoaSex_Determinant",
    "Co-Applicant Sex Basis": "CoaSex_Determinant",

    # Age
    "Age of Applicant or Borrower": "Age",
    "Applicant Age": "Age",
    "Age of Co-Applicant or Co-Borrower": "Coa_Age",
    "Age of CoApplicant or Co-Borrower": "Coa_Age",
    "Co-Applicant Age": "Coa_Age",

    # Income and Financial
    "Income": "Income",
    "Gross Annual Income": "Income",
    "Applicant Income": "Income",
    "Debt-toIncome Ratio": "DTIRatio",
    "Debt-to-Income Ratio": "DTIRatio",
    "Debt to Income Ratio": "DTIRatio",
    "DTI Ratio": "DTIRatio",
    "DTI": "DTIRatio",
    "Combined Loan-to-Value Ratio": "CLTV",
    "CLTV": "CLTV",
    "Property Value": "PropertyValue",

    # Purchaser
    "Type of Purchaser": "Purchaser",
    "Purchaser Type": "Purchaser",

    # Rate Info
    "Rate Spread": "Rate_Spread",
    "Rate Spread for Reporting Purposes": "Rate_Spread",
    "Interest Rate": "InterestRate",
    "Note Rate": "InterestRate",
    "Annual Percentage Rate": "APR",
    "APR": "APR",
    "HOEPA Status": "HOEPA_Status",
    "Lien Status": "Lien_Status",

    # Credit Score
    "Credit Score of Applicant or Borrower": "CreditScore",
    "Applicant Credit Score": "CreditScore",
    "Credit Score": "CreditScore",
    "Credit Score of Co-Applicant or Co-Borrower": "Coa_CreditScore",
    "Credit Score of Co-Applicant or CoBorrower": "Coa_CreditScore",
    "Co-Applicant Credit Score": "Coa_CreditScore",

    # Credit Model
    "Name and Version of Credit Scoring Model": "CreditModel",
    "Credit Scoring Model": "CreditModel",
    "Credit Score Type Used": "CreditModel",
    "Credit Model": "CreditModel",
    "Applicant or Borrower, Name and Version of Credit Scoring Model": "CreditModel",
    "Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8": "CreditModelOther",
    "Applicant or Borrower, Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8": "CreditModelOther",

    # Co-Applicant Credit Model
    "Co-Applicant Credit Scoring Model": "Coa_CreditModel",
    "Credit Score Type of Co-Applicant or Co-Borrower": "Coa_CreditModel",
    "Credit Score Type Used for Co-Applicant": "Coa_CreditModel",
    "Name and Version of Credit Scoring Model of Co-Applicant or Co-Borrower": "Coa_CreditModel",
    "Co-Applicant or CoBorrower, Name and Version of Credit Scoring Model": "Coa_CreditModel",
    "Co-Applicant Name and Version of Credit Scoring Model: Conditional Free Form Text Field": "Coa_CreditModelOther",
    "Co-Applicant or CoBorrower, Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8": "Coa_CreditModelOther",

    # Denial Reasons
    "Denial Reason 1": "Denial1",
    "Reason for Denial: 1": "Denial1",
    "Denial Reason 2": "Denial2",
    "Reason for Denial: 2": "Denial2",
    "Denial Reason 3": "Denial3",
    "Reason for Denial: 3": "Denial3",
    "Denial Reason 4": "Denial4",
    "Reason for Denial: 4": "Denial4",
    "Denial Reason: Free Form Text Field": "DenialOther",
    "Reason for Denial: Conditional Free Form Text Field for Code 9": "DenialOther",

    # Loan Costs
    "Total Loan Costs": "TotalLoanCosts",
    "Total Points and Fees": "TotalPtsAndFees",
    "Origination Charges": "OrigFees",
    "Origination Fees": "OrigFees",
    "Discount Points": "DiscountPts",
    "Lender Credits": "LenderCredts",

    # Loan Terms
    "Loan Term": "Loan_Term",
    "Loan Term (Months)": "Loan_Term_Months",
    "Prepayment Penalty Term": "PPPTerm",
    "Introductory Rate Period": "IntroRatePeriod",
    "Intro Rate Period": "IntroRatePeriod",
    "IntroRatePeriod": "IntroRatePeriod",
    "Initial Rate Period": "IntroRatePeriod",
    "ARM Initial Rate Period": "IntroRatePeriod",
    "Balloon Payment": "BalloonPMT",
    "Interest-Only Payments": "IOPMT",
    "Negative Amortization": "NegAM",
    "Non-Amortizing Features": "NonAmortz",
    "Other Nonamortizing Features": "NonAmortz",

    # Property Features
    "Manufactured Home Secured Property Type": "MHSecPropType",
    "Manufactured Home Land Property Interest": "MHLandPropInt",
    "Total Units": "TotalUnits",
    "Multifamily Affordable Units": "MFAHU",

    # Application Details
    "Application Channel": "APPMethod",
    "Submission of Application": "APPMethod",
    "Initially Payable to Your Institution": "PayableInst",
    "Payable to Institution": "PayableInst",

    # NMLSRID
    "NMLS ID": "NMLSRID",
    "Mortgage Loan Originator NMLSR Identifier": "NMLSRID",
    "NMLSR Identifier": "NMLSRID",
    "Mortgage Loan Originator NMLS ID": "NMLSRID",
    "MLO NMLS ID": "NMLSRID",
    "Originator NMLS": "NMLSRID",
    "MLO NMLSR ID": "NMLSRID",
    "Originator NMLSR ID": "NMLSRID",
    "Loan Originator NMLSR ID": "NMLSRID",

    # AUS
    "Automated Underwriting System 1": "AUSystem1",
    "Automated Underwriting System: 1": "AUSystem1",
    "AUS 1": "AUSystem1",
    "AUS: 1": "AUSystem1",
    "AUS System 1": "AUSystem1",
    "AUSystem1": "AUSystem1",
    "AUS Name": "AUSystem1",
    "AUS Type": "AUSystem1",
    "AUS": "AUSystem1",
    "Automated Underwriting System 2": "AUSystem2",
    "Automated Underwriting System: 2": "AUSystem2",
    "Automated Underwriting System 3": "AUSystem3",
    "Automated Underwriting System: 3": "AUSystem3",
    "Automated Underwriting System 4": "AUSystem4",
    "Automated Underwriting System: 4": "AUSystem4",
    "Automated Underwriting System 5": "AUSystem5",
    "Automated Underwriting System: 5": "AUSystem5",
    "Automated Underwriting System: Free Form Text Field": "AUSystemOther",
    "Automated Underwriting System: Conditional Free Form Text Field for Code 5": "AUSystemOther",

    # AUS Results
    "AUS Result 1": "AUSResult1",
    "AUSResult1": "AUSResult1",
    "Automated Underwriting System Result: 1": "AUSResult1",
    "AUS Recommendation": "AUSResult1",
    "AUS Result": "AUSResult1",
    "AUS Decision": "AUSResult1",
    "AUS Result 2": "AUSResult2",
    "Automated Underwriting System Result: 2": "AUSResult2",
    "AUS Result 3": "AUSResult3",
    "Automated Underwriting System Result: 3": "AUSResult3",
    "AUS Result 4": "AUSResult4",
    "Automated Underwriting System Result: 4": "AUSResult4",
    "AUS Result 5": "AUSResult5",
    "Automated Underwriting System Result: 5": "AUSResult5",
    "AUS Result: Free Form Text Field": "AUSResultOther",
    "Automated Underwriting System Result: Conditional Free Form Text Field for Code 16": "AUSResultOther",

    # Special Loan Types
    "Reverse Mortgage": "REVMTG",
    "Open-End Line of Credit": "OpenLOC",
    "Business or Commercial Purpose": "BUSCML",

    # Additional Fields export
    "Borrower First Name": "FirstName",
    "Borrower Last Name": "LastName",
    "Co-Borrower First Name": "Coa_FirstName",
    "CoBorrower First Name": "Coa_FirstName",
    "Co-Applicant First Name": "Coa_FirstName",
    "Co-Borrower Last Name": "Coa_LastName",
    "CoBorrower Last Name": "Coa_LastName",
    "Co-Applicant Last Name": "Coa_LastName",
    "Loan Officer": "Lender",
    "Loan Processor": "AA_Processor",
    "Post Closer": "LDP_PostCloser",
    "Subject Property Address": "Address",
    "Subject Property City": "City",
    "Subject Property State": "State_abrv",
    "Loan Team Member Name - Post Closer": "LDP_PostCloser",
    "Borrower Name": "BorrowerFullName",

    # Branch Info - comprehensive mappings from Additional Fields
    "Branch Name": "Branch_Name",
    "BranchName": "Branch_Name",
    "Originating Branch": "Branch_Name",
    "OriginatingBranch": "Branch_Name",
    "Originating Branch Name": "Branch_Name",
    "Branch Description": "Branch_Name",
    "BranchDescription": "Branch_Name",
    "Location Name": "Branch_Name",
    "LocationName": "Branch_Name",
    "Office Name": "Branch_Name",
    "OfficeName": "Branch_Name",
    "Loan Team Member Branch Name": "Branch_Name",
    "Loan Team Member Name - Branch": "Branch_Name",

    "Branch Number": "Branch",
    "BranchNumber": "Branch",
    "Branch #": "Branch",
    "Branch Num": "Branch",
    "BranchNum": "Branch",
    "Branch Code": "Branch",
    "Originating Branch Number": "Branch",
    "OriginatingBranchNumber": "Branch",
    "Originating Branch #": "Branch",
    "Branch ID": "Branch",
    "BranchID": "Branch",
    "Location Code": "Branch",
    "LocationCode": "Branch",
    "Office Number": "Branch",
    "OfficeNumber": "Branch",
    "Office #": "Branch",
    "Loan Team Member Branch Number": "Branch",
    "Loan Team Member Branch #": "Branch",
    "FileStarterCostCenterID": "Branch",
    "Cost Center ID": "Branch",
    "CostCenterID": "Branch",
    "Cost Center": "Branch",
    "CostCenter": "Branch",
    # Helper fields
    "Loan Program": "LoanProgram",
    "Rate Type": "RateType",
    "Amortization Type": "RateType",
}

_FIELD_VARIATIONS: dict[str, tuple[str, ...]] = {
    # Additional Fields export
    # Branch Info - comprehensive variations for Encompass/Additional Fields
    "Branch_Name": (
        "Branch_Name", "BranchName", "Branch Name", "BRANCHNAME",
        "Originating Branch", "OriginatingBranch", "Originating Branch Name",
        "Branch Description", "BranchDescription", "Location Name", "LocationName",
        "Office Name", "OfficeName", "Branch Office", "BranchOffice",
        "Loan Team Member Branch Name", "Loan Team Member Name - Branch",
    ),
    "Branch": (
        "Branch", "BranchNumber", "Branch Number", "BranchNumb", "BRANCHNUMB",
        "Branch #", "Branch#", "BranchNum", "Branch Num", "Branch Code",
        "Originating Branch Number", "OriginatingBranchNumber", "Originating Branch #",
        "Branch ID", "BranchID", "Branch Id", "Location Code", "LocationCode",
        "Office Number", "OfficeNumber", "Office #", "Loan Team Member Branch Number",
        "Loan Team Member Branch #", "FileStarterCostCenterID", "Cost Center ID",
        "CostCenterID", "Cost Center", "CostCenter",
    ),

    # Borrower Names (from Additional Fields)
    "LastName": ("LastName", "Last Name", "Borrower Last Name", "Applicant Last Name", "LASTNAME"),
    "FirstName": ("FirstName", "First Name", "Borrower First Name", "Applicant First Name", "FIRSTNAME"),
    "Coa_LastName": ("Coa_LastName", "Co-Borrower Last Name", "Co-Applicant Last Name", "CoBorrower Last Name", "CoLastName", "CLASTNAME"),
    "Coa_FirstName": ("Coa_FirstName", "Co-Borrower First Name", "Co-Applicant First Name", "CoBorrower First Name", "CoFirstName", "CFIRSTNAME"),

    # Staff Info (from Additional Fields)
    "Lender": ("Lender", "Loan Officer", "Originator", "LoanOfficer", "LENDER"),
    "AA_Processor": ("AA_Processor", "Processor", "Loan Processor", "AA_LOANPROCESSOR"),
    "LDP_PostCloser": ("LDP_PostCloser", "Post Closer", "PostCloser", "Loan Team Member Name - Post Closer", "LDP_POSTCLOSER"),

    # Encompass export
    # Core Identifiers
    "LEI": ("LEI", "Legal Entity Identifier (LEI)", "Legal Entity Identifier"),
    "ULI": ("ULI", "Universal Loan Identifier (ULI)", "Universal Loan Identifier"),

    # Dates
    "ApplDate": ("ApplDate", "Application Date", "ApplicationDate", "APPLDATE"),
    "ActionDate": ("ActionDate", "Action Taken Date", "Action Date", "ACTIONDATE"),
    "Rate_Lock_Date": ("Rate_Lock_Date", "Rate Lock Date", "Lock Date", "RATE_LOCK_DATE"),

    # Loan Details
    "LoanType": ("LoanType", "Loan Type", "LOANTYPE"),
    "Purpose": ("Purpose", "Loan Purpose", "PURPOSE"),
    "ConstructionMethod": ("ConstructionMethod", "Construction Method", "CONSTRUCTIONMETHOD"),
    "OccupancyType": ("OccupancyType", "Occupancy Type", "Occupancy", "OCCUPANCYTYPE"),
    "LoanAmountInDollars": ("LoanAmountInDollars", "LoanAmount", "Loan Amount", "Loan Amount in Dollars", "LOANAMOUNTINDOLLARS"),
    "Preapproval": ("Preapproval", "Pre-approval", "PREAPPROVAL"),
    "Action": ("Action", "Action Taken", "ACTION"),

    # Property Info
    "Address": ("Address", "Street Address", "Property Address", "Property Street", "Subject Property Address", "ADDRESS"),
    "City": ("City", "Property City", "Subject Property City", "CITY"),
    "State_abrv": ("State_abrv", "State", "Property State", "STATE_ABRV"),
    "Zip": ("Zip", "ZIP Code", "Property ZIP Code", "ZipCode", "ZIP"),
    "County_5": ("County_5", "County", "County Code", "COUNTY_5"),
    "Tract_11": ("Tract_11", "Census Tract", "Tract", "CensusTract", "Census_Tract", "FFIEC Census Tract", "Tract Number", "Census Tract Number", "TRACT", "TRACT_11"),

    # Ethnicity - Primary Applicant
    "Ethnicity_1": ("Ethnicity_1", "Applicant Ethnicity 1", "Applicant Ethnicity-1", "Ethnicity of Applicant or Borrower: 1", "ETHNICITY_1"),
    "Ethnicity_2": ("Ethnicity_2", "Applicant Ethnicity 2", "Ethnicity of Applicant or Borrower: 2", "ETHNICITY_2"),
    "Ethnicity_3": ("Ethnicity_3", "Applicant Ethnicity 3", "Ethnicity of Applicant or Borrower: 3", "ETHNICITY_3"),
    "Ethnicity_4": ("Ethnicity_4", "Applicant Ethnicity 4", "Ethnicity of Applicant or Borrower: 4", "ETHNICITY_4"),
    "Ethnicity_5": ("Ethnicity_5", "Applicant Ethnicity 5", "Ethnicity of Applicant or Borrower: 5", "ETHNICITY_5"),
    "EthnicityOther": ("EthnicityOther", "Applicant Ethnicity: Free Form Text Field", "Ethnicity of Applicant or Borrower: Conditional Free Form Text Field for Code 14", "ETHNICITYOTHER"),
    "Ethnicity_Determinant": ("Ethnicity_Determinant", "Applicant Ethnicity Basis", "Ethnicity of Applicant or Borrower Collected on the Basis of Visual Observation or Surname", "ETHNICITY_DETERMINANT"),

    # Ethnicity - Co-Applicant
    "Coa_Ethnicity_1": ("Coa_Ethnicity_1", "Co-Applicant Ethnicity 1", "Co-Applicant Ethnicity-1", "Ethnicity of Co-Applicant or Co-Borrower: 1", "Ethnicity of Co-Applicant or CoBorrower: 1", "COA_ETHNICITY_1"),
    "Coa_Ethnicity_2": ("Coa_Ethnicity_2", "Co-Applicant Ethnicity 2", "Ethnicity of Co-Applicant or Co-Borrower: 2", "Ethnicity of Co-Applicant or CoBorrower: 2", "COA_ETHNICITY_2"),
    "Coa_Ethnicity_3": ("Coa_Ethnicity_3", "Co-Applicant Ethnicity 3", "Ethnicity of Co-Applicant or Co-Borrower: 3", "Ethnicity of Co-Applicant or CoBorrower: 3", "COA_ETHNICITY_3"),
    "Coa_Ethnicity_4": ("Coa_Ethnicity_4", "Co-Applicant Ethnicity 4", "Ethnicity of Co-Applicant or Co-Borrower: 4", "Ethnicity of Co-Applicant or CoBorrower: 4", "COA_ETHNICITY_4"),
    "Coa_Ethnicity_5": ("Coa_Ethnicity_5", "Co-Applicant Ethnicity 5", "Ethnicity of Co-Applicant or Co-Borrower: 5", "Ethnicity of Co-Applicant or CoBorrower: 5", "COA_ETHNICITY_5"),
    "Coa_EthnicityOther": ("Coa_EthnicityOther", "Co-Applicant Ethnicity: Free Form Text Field", "Ethnicity of Co-Applicant or CoBorrower: Conditional Free Form Text Field for Code 14", "COA_ETHNICITYOTHER"),
    "Coa_Ethnicity_Determinant": ("Coa_Ethnicity_Determinant", "Co-Applicant Ethnicity Basis", "Ethnicity of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname", "Ethnicity of Co-Applicant or CoBorrower Collected on the Basis of Visual Observation or Surname", "COA_ETHNICITY_DETERMINANT"),

    # Race - Primary Applicant
    "Race_1": ("Race_1", "Applicant Race 1", "Applicant Race-1", "Race of Applicant or Borrower: 1", "RACE_1"),
    "Race_2": ("Race_2", "Applicant Race 2", "Race of Applicant or Borrower: 2", "RACE_2"),
    "Race_3": ("Race_3", "Applicant Race 3", "Race of Applicant or Borrower: 3", "RACE_3"),
    "Race_4": ("Race_4", "Applicant Race 4", "Race of Applicant or Borrower: 4", "RACE_4"),
    "Race_5": ("Race_5", "Applicant Race 5", "Race of Applicant or Borrower: 5", "RACE_5"),
    "Race1_Other": ("Race1_Other", "Applicant Race: Free Form Text Field for American Indian or Alaska Native Enrolled or Principal Tribe", "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 1", "RACE1_OTHER"),
    "Race27_Other": ("Race27_Other", "Applicant Race: Free Form Text Field for Other Asian", "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 27", "RACE27_OTHER"),
    "Race44_Other": ("Race44_Other", "Applicant Race: Free Form Text Field for Other Pacific Islander", "Race of Applicant or Borrower: Conditional Free Form Text Field for Code 44", "RACE44_OTHER"),
    "Race_Determinant": ("Race_Determinant", "Applicant Race Basis", "Race of Applicant or Borrower Collected on the Basis of Visual Observation or Surname", "RACE_DETERMINANT"),

    # Race - Co-Applicant
    "CoaRace_1": ("CoaRace_1", "Co-Applicant Race 1", "Co-Applicant Race-1", "Race of Co-Applicant or Co-Borrower: 1", "Race of CoApplicant or Co-Borrower: 1", "COARACE_1"),
    "CoaRace_2": ("CoaRace_2", "Co-Applicant Race 2", "Race of Co-Applicant or Co-Borrower: 2", "Race of CoApplicant or Co-Borrower: 2", "COARACE_2"),
    "CoaRace_3": ("CoaRace_3", "Co-Applicant Race 3", "Race of Co-Applicant or Co-Borrower: 3", "Race of CoApplicant or Co-Borrower: 3", "COARACE_3"),
    "CoaRace_4": ("CoaRace_4", "Co-Applicant Race 4", "Race of Co-Applicant or Co-Borrower: 4", "Race of CoApplicant or Co-Borrower: 4", "COARACE_4"),
    "CoaRace_5": ("CoaRace_5", "Co-Applicant Race 5", "Race of Co-Applicant or Co-Borrower: 5", "Race of CoApplicant or Co-Borrower: 5", "COARACE_5"),
    "CoaRace1_Other": ("CoaRace1_Other", "Co-Applicant Race: Free Form Text Field for American Indian or Alaska Native", "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 1", "COARACE1_OTHER"),
    "CoaRace27_Other": ("CoaRace27_Other", "Co-Applicant Race: Free Form Text Field for Other Asian", "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 27", "COARACE27_OTHER"),
    "CoaRace44_Other": ("CoaRace44_Other", "Co-Applicant Race: Free Form Text Field for Other Pacific Islander", "Race of CoApplicant or Co-Borrower: Conditional Free Form Text Field for Code 44", "COARACE44_OTHER"),
    "CoaRace_Determinant": ("CoaRace_Determinant", "Co-Applicant Race Basis", "Race of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname", "Race of CoApplicant or Co-Borrower Collected on the Basis of Visual Observation or Surname", "COARACE_DETERMINANT"),

    # Sex/Gender
    "Sex": ("Sex", "Applicant Sex", "Sex of Applicant or Borrower", "SEX"),
    "CoaSex": ("CoaSex", "Co-Applicant Sex", "Sex of Co-Applicant or Co-Borrower", "Sex of CoApplicant or Co-Borrower", "COASEX"),
    "Sex_Determinant": ("Sex_Determinant", "Applicant Sex Basis", "Sex of Applicant or Borrower Collected on the Basis of Visual Observation or Surname", "SEX_DETERMINANT"),
    "CoaSex_Determinant": ("CoaSex_Determinant", "Co-Applicant Sex Basis", "Sex of Co-Applicant or Co-Borrower Collected on the Basis of Visual Observation or Surname", "Sex of CoApplicant or Co-Borrower Collected on the Basis of Visual Observation or Surname", "COASEX_DETERMINANT"),

    # Age
    "Age": ("Age", "Applicant Age", "Age of Applicant or Borrower", "AGE"),
    "Coa_Age": ("Coa_Age", "Co-Applicant Age", "Age of Co-Applicant or Co-Borrower", "Age of CoApplicant or Co-Borrower", "COA_AGE"),

    # Income and Financial
    "Income": ("Income", "Gross Annual Income", "Applicant Income", "INCOME"),
    "Purchaser": ("Purchaser", "Type of Purchaser", "Purchaser Type", "PURCHASER"),
    "Rate_Spread": ("Rate_Spread", "Rate Spread", "Rate Spread for Reporting Purposes", "RATE_SPREAD"),
    "HOEPA_Status": ("HOEPA_Status", "HOEPA Status", "HOEPA_STATUS"),
    "Lien_Status": ("Lien_Status", "Lien Status", "LIEN_STATUS"),

    # Credit Score
    "CreditScore": ("CreditScore", "Credit Score", "Applicant Credit Score", "Credit Score of Applicant or Borrower", "CREDITSCORE"),
    "Coa_CreditScore": ("Coa_CreditScore", "Co-Applicant Credit Score", "Credit Score of Co-Applicant or Co-Borrower", "Credit Score of Co-Applicant or CoBorrower", "COA_CREDITSCORE"),
    "CreditModel": ("CreditModel", "Credit Scoring Model", "Name and Version of Credit Scoring Model", "Credit Score Type Used", "Credit Model", "Applicant or Borrower, Name and Version of Credit Scoring Model", "CREDITMODEL"),
    "CreditModelOther": ("CreditModelOther", "Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8", "Applicant or Borrower, Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8", "CREDITMODELOTHER"),
    "Coa_CreditModel": ("Coa_CreditModel", "Co-Applicant Credit Scoring Model", "Co-Applicant or CoBorrower, Name and Version of Credit Scoring Model", "Credit Score Type Used for Co-Applicant", "Name and Version of Credit Scoring Model of Co-Applicant or Co-Borrower", "COA_CREDITMODEL"),
    "Coa_CreditModelOther": ("Coa_CreditModelOther", "Co-Applicant Name and Version of Credit Scoring Model: Conditional Free Form Text Field", "Co-Applicant or CoBorrower, Name and Version of Credit Scoring Model: Conditional Free Form Text Field for Code 8", "COA_CREDITMODELOTHER"),

    # Denial Reasons
    "Denial1": ("Denial1", "Denial Reason 1", "Reason for Denial: 1", "DENIAL1"),
    "Denial2": ("Denial2", "Denial Reason 2", "Reason for Denial: 2", "DENIAL2"),
    "Denial3": ("Denial3", "Denial Reason 3", "Reason for Denial: 3", "DENIAL3"),
    "Denial4": ("Denial4", "Denial Reason 4", "Reason for Denial: 4", "DENIAL4"),
    "DenialOther": ("DenialOther", "Denial Reason: Free Form Text Field", "Reason for Denial: Conditional Free Form Text Field for Code 9", "DENIALOTHER"),

    # Loan Costs
    "TotalLoanCosts": ("TotalLoanCosts", "Total Loan Costs", "TOTALLOANCOSTS"),
    "TotalPtsAndFees": ("TotalPtsAndFees", "Total Points and Fees", "TOTALPTSANDFEES"),
    "OrigFees": ("OrigFees", "Origination Charges", "Origination Fees", "ORIGFEES"),
    "DiscountPts": ("DiscountPts", "Discount Points", "DISCOUNTPTS"),
    "LenderCredts": ("LenderCredts", "Lender Credits", "LENDERCREDTS"),
    "InterestRate": ("InterestRate", "Interest Rate", "Note Rate", "INTERESTRATE"),
    "APR": ("APR", "Annual Percentage Rate"),
    "PPPTerm": ("PPPTerm", "Prepayment Penalty Term", "PPPTERM"),
    "DTIRatio": ("DTIRatio", "Debt-toIncome Ratio", "Debt-to-Income Ratio", "Debt to Income Ratio", "DTI Ratio", "DTI", "DTIRATIO"),
    "DSC": ("DSC",),
    "CLTV": ("CLTV", "Combined Loan-to-Value Ratio"),

    # Loan Terms
    "Loan_Term": ("Loan_Term", "Loan Term", "LoanTerm", "Term", "LOAN_TERM"),
    "Loan_Term_Months": ("Loan_Term_Months", "Loan Term (Months)", "LoanTermMonths", "Term in Months", "LOAN_TERM_MONTHS"),
    "IntroRatePeriod": ("IntroRatePeriod", "Introductory Rate Period", "Intro Rate Period", "Initial Rate Period", "ARM Initial Rate Period", "INTRORATEPERIOD"),
    "BalloonPMT": ("BalloonPMT", "Balloon Payment", "BALLOONPMT"),
    "IOPMT": ("IOPMT", "Interest-Only Payments"),
    "NegAM": ("NegAM", "Negative Amortization", "NEGAM"),
    "NonAmortz": ("NonAmortz", "Non-Amortizing Features", "Other Nonamortizing Features", "NONAMORTZ"),

    # Property
    "PropertyValue": ("PropertyValue", "Property Value", "PROPERTYVALUE"),
    "MHSecPropType": ("MHSecPropType", "Manufactured Home Secured Property Type", "MHSECPROPTYPE"),
    "MHLandPropInt": ("MHLandPropInt", "Manufactured Home Land Property Interest", "MHLANDPROPINT"),
    "TotalUnits": ("TotalUnits", "Total Units", "TOTALUNITS"),
    "MFAHU": ("MFAHU", "Multifamily Affordable Units"),

    # Application
    "APPMethod": ("APPMethod", "Application Channel", "Submission of Application", "APPMETHOD"),
    "PayableInst": ("PayableInst", "Initially Payable to Your Institution", "Payable to Institution", "PAYABLEINST"),
    "NMLSRID": ("NMLSRID", "NMLS ID", "Originator NMLSR ID", "Loan Originator NMLSR ID", "Mortgage Loan Originator NMLSR Identifier", "NMLSR Identifier", "MLO NMLS ID", "Mortgage Loan Originator NMLS ID", "MLO NMLSR ID"),

    # AUS System
    "AUSystem1": ("AUSystem1", "AUS", "AUS 1", "Automated Underwriting System 1", "Automated Underwriting System: 1", "AUS System 1", "AUS Name", "AUS Type", "AUSYSTEM1"),
    "AUSystem2": ("AUSystem2", "Automated Underwriting System 2", "Automated Underwriting System: 2", "AUSYSTEM2"),
    "AUSystem3": ("AUSystem3", "Automated Underwriting System 3", "Automated Underwriting System: 3", "AUSYSTEM3"),
    "AUSystem4": ("AUSystem4", "Automated Underwriting System 4", "Automated Underwriting System: 4", "AUSYSTEM4"),
    "AUSystem5": ("AUSystem5", "Automated Underwriting System 5", "Automated Underwriting System: 5", "AUSYSTEM5"),
    "AUSystemOther": ("AUSystemOther", "Automated Underwriting System: Free Form Text Field", "Automated Underwriting System: Conditional Free Form Text Field for Code 5", "AUSYSTEMOTHER"),

    # AUS Results
    "AUSResult1": ("AUSResult1", "AUS Result", "AUS Result 1", "Automated Underwriting System Result: 1", "AUS Recommendation", "AUS Decision", "AUSRESULT1"),
    "AUSResult2": ("AUSResult2", "AUS Result 2", "Automated Underwriting System Result: 2", "AUSRESULT2"),
    "AUSResult3": ("AUSResult3", "AUS Result 3", "Automated Underwriting System Result: 3", "AUSRESULT3"),
    "AUSResult4": ("AUSResult4", "AUS Result 4", "Automated Underwriting System Result: 4", "AUSRESULT4"),
    "AUSResult5": ("AUSResult5", "AUS Result 5", "Automated Underwriting System Result: 5", "AUSRESULT5"),
    "AUSResultOther": ("AUSResultOther", "AUS Result: Free Form Text Field", "Automated Underwriting System Result: Conditional Free Form Text Field for Code 16", "AUSRESULTOTHER"),

    # Special Loan Types
    "REVMTG": ("REVMTG", "Reverse Mortgage"),
    "OpenLOC": ("OpenLOC", "Open-End Line of Credit", "OPENLOC"),
    "BUSCML": ("BUSCML", "Business or Commercial Purpose"),

    # Blank columns for manual entry
    "ErrorMadeBy": ("ErrorMadeBy",),
    "EditStatus": ("EditStatus",),
    "EditCkComments": ("EditCkComments",),
    "Comments": ("Comments",),

    # Helper fields
    "ApplNumb": ("ApplNumb", "Loan Number", "LoanNumber", "Loan ID", "Application Number", "APPLNUMB"),
    "BorrowerFullName": ("BorrowerFullName", "Borrower Name", "Borrower Full Name", "BORROWERNAME"),
    "RateType": ("RateType", "Rate Type", "Amortization Type", "_LaserPro_RateType", "RATETYPE"),
    "LoanProgram": ("LoanProgram", "Loan Program", "Program", "LOANPROGRAM"),
}

LAR_RECORD_TYPE_FIELD = "RecordType"
LAR_HEADER_RECORD_TYPE = "1"
LAR_DATA_RECORD_TYPE = "2"

# Positional layout of the Compliance Reporter LAR export (0 is the record type).
_LAR_POSITION_FIELD_MAP: dict[int, str] = {
    0: LAR_RECORD_TYPE_FIELD,
    1: "LEI",
    2: "ULI",
    3: "ApplDate",
    4: "LoanType",
    5: "Purpose",
    6: "Preapproval",
    7: "ConstructionMethod",
    8: "OccupancyType",
    9: "LoanAmountInDollars",
    10: "Action",
    11: "ActionDate",
    12: "Address",
    13: "City",
    14: "State_abrv",
    15: "Zip",
    16: "County_5",
    17: "Tract_11",
    18: "Ethnicity_1",
    19: "Ethnicity_2",
    20: "Ethnicity_3",
    21: "Ethnicity_4",
    22: "Ethnicity_5",
    23: "EthnicityOther",
    24: "Coa_Ethnicity_1",
    25: "Coa_Ethnicity_2",
    26: "Coa_Ethnicity_3",
    27: "Coa_Ethnicity_4",
    28: "Coa_Ethnicity_5",
    29: "Coa_EthnicityOther",
    30: "Ethnicity_Determinant",
    31: "Coa_Ethnicity_Determinant",
    32: "Race_1",
    33: "Race_2",
    34: "Race_3",
    35: "Race_4",
    36: "Race_5",
    37: "Race1_Other",
    38: "Race27_Other",
    39: "Race44_Other",
    40: "CoaRace_1",
    41: "CoaRace_2",
    42: "CoaRace_3",
    43: "CoaRace_4",
    44: "CoaRace_5",
    45: "CoaRace1_Other",
    46: "CoaRace27_Other",
    47: "CoaRace44_Other",
    48: "Race_Determinant",
    49: "CoaRace_Determinant",
    50: "Sex",
    51: "CoaSex",
    52: "Sex_Determinant",
    53: "CoaSex_Determinant",
    54: "Age",
    55: "Coa_Age",
    56: "Income",
    57: "Purchaser",
    58: "Rate_Spread",
    59: "HOEPA_Status",
    60: "Lien_Status",
    61: "CreditScore",
    62: "Coa_CreditScore",
    63: "CreditModel",
    64: "CreditModelOther",
    65: "Coa_CreditModel",
    66: "Coa_CreditModelOther",
    67: "Denial1",
    68: "Denial2",
    69: "Denial3",
    70: "Denial4",
    71: "DenialOther",
    72: "TotalLoanCosts",
    73: "TotalPtsAndFees",
    74: "OrigFees",
    75: "DiscountPts",
    76: "LenderCredts",
    77: "InterestRate",
    78: "PPPTerm",
    79: "DTIRatio",
    80: "CLTV",
    81: "Loan_Term",
    82: "IntroRatePeriod",
    83: "BalloonPMT",
    84: "IOPMT",
    85: "NegAM",
    86: "NonAmortz",
    87: "PropertyValue",
    88: "MHSecPropType",
    89: "MHLandPropInt",
    90: "TotalUnits",
    91: "MFAHU",
    92: "APPMethod",
    93: "PayableInst",
    94: "NMLSRID",
    95: "AUSystem1",
    96: "AUSystem2",
    97: "AUSystem3",
    98: "AUSystem4",
    99: "AUSystem5",
    100: "AUSystemOther",
    101: "AUSResult1",
    102: "AUSResult2",
    103: "AUSResult3",
    104: "AUSResult4",
    105: "AUSResult5",
    106: "AUSResultOther",
    107: "REVMTG",
    108: "OpenLOC",
    109: "BUSCML",
}


def _verify_alias_tables(
    long_form: Mapping[str, str],
    variations: Mapping[str, tuple[str, ...]],
) -> None:
    known_fields = set(HMDA_COLUMN_ORDER) | set(HELPER_FIELDS)

    unknown_targets = sorted({target for target in long_form.values() if target not in known_fields})
    if unknown_targets:
        raise ValueError(
            "Long-form field map targets unknown canonical field(s): " + ", ".join(unknown_targets)
        )

    unknown_fields = sorted(name for name in variations if name not in known_fields)
    if unknown_fields:
        raise ValueError(
            "Field variations reference unknown canonical field(s): " + ", ".join(unknown_fields)
        )

    for name, spellings in variations.items():
        if not spellings or not all(isinstance(spelling, str) and spelling for spelling in spellings):
            raise ValueError(f"Field variations for '{name}' must be a non-empty tuple of strings")

    # Case-insensitive collisions must agree on the canonical target.
    lowered: dict[str, str] = {}
    for source, target in long_form.items():
        key = source.strip().lower()
        existing = lowered.setdefault(key, target)
        if existing != target:
            raise ValueError(
                f"Long-form field map spelling '{source}' maps to both '{existing}' and '{target}'"
            )

    # Normalizing a canonical name must return it unchanged.
    remapped = sorted(
        name for name in known_fields if lowered.get(name.lower(), name) != name
    )
    if remapped:
        raise ValueError(
            "Long-form field map renames canonical field(s): " + ", ".join(remapped)
        )


_verify_alias_tables(_LONG_FORM_FIELD_MAP, _FIELD_VARIATIONS)

LONG_FORM_FIELD_MAP: Mapping[str, str] = MappingProxyType(_LONG_FORM_FIELD_MAP)
FIELD_VARIATIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(_FIELD_VARIATIONS)
LAR_POSITION_FIELD_MAP: Mapping[int, str] = MappingProxyType(_LAR_POSITION_FIELD_MAP)


def aliases_for(field_name: str) -> tuple[str, ...]:
    """Return the ordered source spellings known for one canonical or helper field."""
    return FIELD_VARIATIONS.get(field_name, ())
