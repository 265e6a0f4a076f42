table_1_0 = {
'0':'Experimental',
'1':'Version Implemented on 7 November 2001',
'2':'Version Implemented on 4 November 2003',
'3':'Version Implemented on 2 November 2005',
'4':'Version Implemented on 7 November 2007',
'5':'Version Implemented on 4 November 2009',
'6':'Version Implemented on 15 September 2010',
'7':'Version Implemented on 4 May 2011',
'8':'Version Implemented on 8 November 2011',
'9':'Version Implemented on 2 May 2012',
'10':'Version Implemented on 7 November 2012',
'11-254':'Future Version',
'255':'Missing',
}

table_1_1 = {
'0':'Local tables not used. Only table entries and templates from the current master table are valid.',
'1-254':'Number of local table version used.',
'255':'Missing',
}

table_1_2 = {
'0':'Analysis',
'1':'Start of Forecast',
'2':'Verifying Time of Forecast',
'3':'Observation Time',
'4-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_1_3 = {
'0':'Operational Products',
'1':'Operational Test Products',
'2':'Research Products',
'3':'Re-Analysis Products',
'4-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_1_4 = {
'0':'Analysis Products',
'1':'Forecast Products',
'2':'Analysis and Forecast Products',
'3':'Control Forecast Products',
'4':'Perturbed Forecast Products',
'5':'Control and Perturbed Forecast Products',
'6':'Processed Satellite Observations',
'7':'Processed Radar Observations',
'8':'Event Probability',
'9-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}
